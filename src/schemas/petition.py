"""Petition and support tier schemas."""

from datetime import datetime

from pydantic import Field

from src.models.petition import MAX_SUPPORT_TIERS
from src.schemas.base import CamelModel

# --- Support Tier ---


class SupportTierCreate(CamelModel):
    """Create a support tier."""

    title: str = Field(..., min_length=1, max_length=128)
    description: str = Field(..., min_length=1, max_length=1024)
    cost: int = Field(..., ge=0)


class SupportTierUpdate(CamelModel):
    """Update a support tier."""

    title: str | None = Field(None, min_length=1, max_length=128)
    description: str | None = Field(None, min_length=1, max_length=1024)
    cost: int | None = Field(None, ge=0)


class SupportTierResponse(CamelModel):
    """Support tier response."""

    support_tier_id: int
    title: str
    description: str
    cost: int


class SupportTierCreatedResponse(CamelModel):
    """Id of the newly added support tier."""

    support_tier_id: int


# --- Petition ---


class PetitionCreate(CamelModel):
    """Create a new petition together with its support tiers."""

    title: str = Field(..., min_length=1, max_length=128)
    description: str = Field(..., min_length=1, max_length=1024)
    category_id: int
    support_tiers: list[SupportTierCreate] = Field(
        ..., min_length=1, max_length=MAX_SUPPORT_TIERS
    )


class PetitionUpdate(CamelModel):
    """Update a petition."""

    title: str | None = Field(None, min_length=1, max_length=128)
    description: str | None = Field(None, min_length=1, max_length=1024)
    category_id: int | None = None


class PetitionCreatedResponse(CamelModel):
    """Id of the newly created petition."""

    petition_id: int


class PetitionSummary(CamelModel):
    """Petition as shown in search results."""

    petition_id: int
    title: str
    category_id: int
    owner_id: int
    owner_first_name: str
    owner_last_name: str
    number_of_supporters: int
    creation_date: datetime
    supporting_cost: int | None


class PetitionListResponse(CamelModel):
    """A page of petitions plus the total number matching the filters."""

    petitions: list[PetitionSummary]
    count: int


class PetitionDetail(PetitionSummary):
    """Full petition view."""

    description: str
    money_raised: int
    support_tiers: list[SupportTierResponse]
