"""Petition API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import (
    get_current_user,
    get_image_storage,
    get_owned_petition,
    get_petition_service,
)
from src.models.enums import PetitionSort
from src.models.petition import Petition
from src.models.user import User
from src.schemas.base import MessageResponse
from src.schemas.category import CategoryResponse
from src.schemas.petition import (
    PetitionCreate,
    PetitionCreatedResponse,
    PetitionDetail,
    PetitionListResponse,
    PetitionUpdate,
)
from src.services.image_storage import ImageStorage
from src.services.petition_service import PetitionFilter, PetitionService

router = APIRouter(prefix="/api/v1/petitions", tags=["petitions"])


@router.get("", response_model=PetitionListResponse)
def get_petitions(
    service: Annotated[PetitionService, Depends(get_petition_service)],
    q: Annotated[str | None, Query(max_length=64)] = None,
    category_ids: Annotated[list[int] | None, Query(alias="categoryIds")] = None,
    supporting_cost: Annotated[int | None, Query(alias="supportingCost", ge=0)] = None,
    owner_id: Annotated[int | None, Query(alias="ownerId")] = None,
    supporter_id: Annotated[int | None, Query(alias="supporterId")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    start_index: Annotated[int, Query(alias="startIndex", ge=0)] = 0,
    count: Annotated[int | None, Query(ge=0)] = None,
):
    """Search petitions with optional filters, sorting and paging."""
    filters = PetitionFilter(
        q=q,
        category_ids=category_ids,
        supporting_cost=supporting_cost,
        owner_id=owner_id,
        supporter_id=supporter_id,
        sort_by=PetitionSort.parse(sort_by),
        start_index=start_index,
        count=count,
    )
    petitions, total = service.list_petitions(filters)

    if not petitions:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No petitions found")

    return PetitionListResponse(petitions=petitions, count=total)


@router.get("/categories", response_model=list[CategoryResponse])
def get_categories(
    service: Annotated[PetitionService, Depends(get_petition_service)],
):
    """List all petition categories."""
    return service.list_categories()


@router.get("/{petition_id}", response_model=PetitionDetail)
def get_petition(
    petition_id: int,
    service: Annotated[PetitionService, Depends(get_petition_service)],
):
    """Get a petition with its support tiers."""
    return service.get_petition_detail(petition_id)


@router.post("", response_model=PetitionCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_petition(
    current_user: Annotated[User, Depends(get_current_user)],
    petition_data: PetitionCreate,
    service: Annotated[PetitionService, Depends(get_petition_service)],
):
    """Create a petition with one to three support tiers."""
    petition = service.create_petition(current_user, petition_data)
    return PetitionCreatedResponse(petition_id=petition.id)


@router.patch("/{petition_id}", response_model=MessageResponse)
def update_petition(
    petition: Annotated[Petition, Depends(get_owned_petition)],
    petition_data: PetitionUpdate,
    service: Annotated[PetitionService, Depends(get_petition_service)],
):
    """Edit a petition (owner only)."""
    service.edit_petition(petition, petition_data)
    return MessageResponse(message="Petition updated")


@router.delete("/{petition_id}", response_model=MessageResponse)
async def delete_petition(
    petition: Annotated[Petition, Depends(get_owned_petition)],
    service: Annotated[PetitionService, Depends(get_petition_service)],
    storage: Annotated[ImageStorage, Depends(get_image_storage)],
):
    """Delete a petition that nobody supports yet (owner only)."""
    image_filename = service.delete_petition(petition)
    await storage.delete(image_filename)
    return MessageResponse(message="Petition deleted")
