"""Support tier API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_owned_petition, get_support_tier_service
from src.models.petition import Petition
from src.schemas.base import MessageResponse
from src.schemas.petition import SupportTierCreate, SupportTierCreatedResponse, SupportTierUpdate
from src.services.support_tier_service import SupportTierService

router = APIRouter(prefix="/api/v1/petitions/{petition_id}/supportTiers", tags=["support tiers"])


@router.post("", response_model=SupportTierCreatedResponse, status_code=status.HTTP_201_CREATED)
def add_support_tier(
    petition: Annotated[Petition, Depends(get_owned_petition)],
    tier_data: SupportTierCreate,
    service: Annotated[SupportTierService, Depends(get_support_tier_service)],
):
    """Add a support tier to a petition (owner only)."""
    tier = service.add_support_tier(petition, tier_data)
    return SupportTierCreatedResponse(support_tier_id=tier.id)


@router.patch("/{tier_id}", response_model=MessageResponse)
def edit_support_tier(
    tier_id: int,
    petition: Annotated[Petition, Depends(get_owned_petition)],
    tier_data: SupportTierUpdate,
    service: Annotated[SupportTierService, Depends(get_support_tier_service)],
):
    """Edit a support tier that has no supporters (owner only)."""
    service.edit_support_tier(petition, tier_id, tier_data)
    return MessageResponse(message="Support tier updated")


@router.delete("/{tier_id}", response_model=MessageResponse)
def delete_support_tier(
    tier_id: int,
    petition: Annotated[Petition, Depends(get_owned_petition)],
    service: Annotated[SupportTierService, Depends(get_support_tier_service)],
):
    """Remove a support tier that has no supporters (owner only)."""
    service.delete_support_tier(petition, tier_id)
    return MessageResponse(message="Support tier removed")
