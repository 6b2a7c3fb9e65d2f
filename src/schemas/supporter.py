"""Supporter (pledge) schemas."""

from datetime import datetime

from pydantic import Field

from src.schemas.base import CamelModel


class SupporterCreate(CamelModel):
    """Pledge support at a tier."""

    support_tier_id: int
    message: str | None = Field(None, max_length=512)


class SupporterResponse(CamelModel):
    """Supporter response."""

    support_id: int
    support_tier_id: int
    message: str | None
    supporter_id: int
    supporter_first_name: str
    supporter_last_name: str
    timestamp: datetime


class SupporterCreatedResponse(CamelModel):
    """Id of the newly created pledge."""

    support_id: int
