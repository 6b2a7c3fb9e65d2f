"""FastAPI dependencies for authentication, ownership and database access."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.dependencies.models import Dependant
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.petition import Petition
from src.models.user import User
from src.services.auth import resolve_token
from src.services.image_storage import ImageStorage
from src.services.petition_service import PetitionService
from src.services.support_tier_service import SupportTierService
from src.services.supporter_service import SupporterService
from src.services.user_service import UserService

security = APIKeyHeader(name="X-Authorization", auto_error=False)


def get_current_user(
    token: Annotated[str | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the session token."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authentication token provided",
        )

    user = resolve_token(db, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )

    return user


def get_optional_user(
    token: Annotated[str | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User | None:
    """Resolve the session token when one is sent; anonymous otherwise."""
    if not token:
        return None
    return resolve_token(db, token)


def get_own_account(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Resolve ``user_id`` to the caller's own account, 403 for anyone else's."""
    if user_id != current_user.id:
        if db.query(User.id).filter(User.id == user_id).first() is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only change your own account",
        )
    return current_user


def get_petition(
    petition_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> Petition:
    """Load a petition by id or 404."""
    petition = db.query(Petition).filter(Petition.id == petition_id).first()
    if petition is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Petition not found")
    return petition


def get_owned_petition(
    current_user: Annotated[User, Depends(get_current_user)],
    petition: Annotated[Petition, Depends(get_petition)],
) -> Petition:
    """Load a petition the current user owns.

    Resolved as a dependency so ownership is decided before the request body
    is validated.
    """
    if petition.owner_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the owner of a petition may modify it",
        )
    return petition


def get_supportable_petition(
    current_user: Annotated[User, Depends(get_current_user)],
    petition: Annotated[Petition, Depends(get_petition)],
) -> Petition:
    """Load a petition the current user is allowed to pledge to."""
    if petition.owner_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot support your own petition",
        )
    return petition


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db)


def get_petition_service(
    db: Annotated[Session, Depends(get_db)],
) -> PetitionService:
    """Get petition service with dependencies."""
    return PetitionService(db)


def get_support_tier_service(
    db: Annotated[Session, Depends(get_db)],
) -> SupportTierService:
    """Get support tier service with dependencies."""
    return SupportTierService(db)


def get_supporter_service(
    db: Annotated[Session, Depends(get_db)],
) -> SupporterService:
    """Get supporter service with dependencies."""
    return SupporterService(db)


def get_image_storage() -> ImageStorage:
    """Get image storage rooted at the configured directory."""
    return ImageStorage()


def requires_auth(dependant: Dependant) -> bool:
    """Whether ``get_current_user`` appears anywhere in a route's dependency tree."""
    if dependant.call is get_current_user:
        return True
    return any(requires_auth(sub) for sub in dependant.dependencies)


def has_valid_session(request: Request) -> bool:
    """Resolve the request's token outside the normal dependency flow.

    Used when the body fails to parse, since FastAPI validates the body
    before any dependency runs.
    """
    token = request.headers.get(security.model.name)
    if not token:
        return False

    provider = request.app.dependency_overrides.get(get_db, get_db)
    sessions = provider()
    db = next(sessions)
    try:
        return resolve_token(db, token) is not None
    finally:
        sessions.close()
