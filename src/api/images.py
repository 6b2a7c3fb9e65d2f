"""User and petition image endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from src.api.dependencies import (
    get_image_storage,
    get_owned_petition,
    get_own_account,
    get_petition,
    get_petition_service,
    get_user_service,
)
from src.models.petition import Petition
from src.models.user import User
from src.schemas.base import MessageResponse
from src.services.image_storage import ImageStorage, content_type_for
from src.services.petition_service import PetitionService
from src.services.user_service import UserService

router = APIRouter(prefix="/api/v1", tags=["images"])


async def read_image(storage: ImageStorage, filename: str | None) -> Response:
    """Serve a stored image, or 404 if none is set or the file is gone."""
    if not filename:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No image set")
    data = await storage.read(filename)
    if data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image file not found")
    return Response(content=data, media_type=content_type_for(filename))


# --- User images ---


@router.get("/users/{user_id}/image")
async def get_user_image(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
    storage: Annotated[ImageStorage, Depends(get_image_storage)],
):
    """Get a user's profile image."""
    user = service.get_user(user_id)
    return await read_image(storage, user.image_filename)


@router.api_route("/users/{user_id}/image", methods=["PUT", "POST"], response_model=MessageResponse)
async def set_user_image(
    request: Request,
    response: Response,
    account: Annotated[User, Depends(get_own_account)],
    service: Annotated[UserService, Depends(get_user_service)],
    storage: Annotated[ImageStorage, Depends(get_image_storage)],
):
    """Set or replace your profile image. 201 when first set, 200 when replaced."""
    data = await request.body()
    filename = await storage.save("user", account.id, request.headers.get("content-type"), data)
    previous = service.set_image_filename(account, filename)
    await storage.delete(previous)

    if previous:
        return MessageResponse(message="Image updated")
    response.status_code = status.HTTP_201_CREATED
    return MessageResponse(message="Image added")


@router.delete("/users/{user_id}/image", response_model=MessageResponse)
async def delete_user_image(
    account: Annotated[User, Depends(get_own_account)],
    service: Annotated[UserService, Depends(get_user_service)],
    storage: Annotated[ImageStorage, Depends(get_image_storage)],
):
    """Remove your profile image."""
    if not account.image_filename:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No image set")
    previous = service.set_image_filename(account, None)
    await storage.delete(previous)
    return MessageResponse(message="Image removed")


# --- Petition images ---


@router.get("/petitions/{petition_id}/image")
async def get_petition_image(
    petition: Annotated[Petition, Depends(get_petition)],
    storage: Annotated[ImageStorage, Depends(get_image_storage)],
):
    """Get a petition's hero image."""
    return await read_image(storage, petition.image_filename)


@router.api_route(
    "/petitions/{petition_id}/image", methods=["PUT", "POST"], response_model=MessageResponse
)
async def set_petition_image(
    request: Request,
    response: Response,
    petition: Annotated[Petition, Depends(get_owned_petition)],
    service: Annotated[PetitionService, Depends(get_petition_service)],
    storage: Annotated[ImageStorage, Depends(get_image_storage)],
):
    """Set or replace a petition's hero image (owner only)."""
    data = await request.body()
    filename = await storage.save(
        "petition", petition.id, request.headers.get("content-type"), data
    )
    previous = service.set_image_filename(petition, filename)
    await storage.delete(previous)

    if previous:
        return MessageResponse(message="Image updated")
    response.status_code = status.HTTP_201_CREATED
    return MessageResponse(message="Image added")


@router.delete("/petitions/{petition_id}/image", response_model=MessageResponse)
async def delete_petition_image(
    petition: Annotated[Petition, Depends(get_owned_petition)],
    service: Annotated[PetitionService, Depends(get_petition_service)],
    storage: Annotated[ImageStorage, Depends(get_image_storage)],
):
    """Remove a petition's hero image (owner only)."""
    if not petition.image_filename:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No image set")
    previous = service.set_image_filename(petition, None)
    await storage.delete(previous)
    return MessageResponse(message="Image removed")
