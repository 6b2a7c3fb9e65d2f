"""Supporter API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    get_current_user,
    get_petition,
    get_supportable_petition,
    get_supporter_service,
)
from src.models.petition import Petition
from src.models.user import User
from src.schemas.supporter import SupporterCreate, SupporterCreatedResponse, SupporterResponse
from src.services.supporter_service import SupporterService

router = APIRouter(prefix="/api/v1/petitions/{petition_id}/supporters", tags=["supporters"])


@router.get("", response_model=list[SupporterResponse])
def get_supporters(
    petition: Annotated[Petition, Depends(get_petition)],
    service: Annotated[SupporterService, Depends(get_supporter_service)],
):
    """List everyone who has supported a petition, newest first."""
    return service.list_supporters(petition)


@router.post("", response_model=SupporterCreatedResponse, status_code=status.HTTP_201_CREATED)
def add_supporter(
    current_user: Annotated[User, Depends(get_current_user)],
    petition: Annotated[Petition, Depends(get_supportable_petition)],
    support_data: SupporterCreate,
    service: Annotated[SupporterService, Depends(get_supporter_service)],
):
    """Support a petition at one of its tiers."""
    supporter = service.add_supporter(petition, current_user, support_data)
    return SupporterCreatedResponse(support_id=supporter.id)
