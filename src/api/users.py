"""User account and session API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import (
    get_current_user,
    get_optional_user,
    get_own_account,
    get_user_service,
)
from src.database import get_db
from src.models.user import User
from src.schemas.base import MessageResponse
from src.schemas.user import (
    LoginResponse,
    RegisterResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from src.services.auth import authenticate_user, end_session, start_session
from src.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user."""
    user = service.register(user_data)
    return RegisterResponse(user_id=user.id)


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password, starting a new session."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    token = start_session(db, user)
    return LoginResponse(user_id=user.id, token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Logout, invalidating the current session token."""
    end_session(db, current_user)
    return MessageResponse(message="Logged out successfully")


@router.get("/{user_id}", response_model=UserResponse, response_model_exclude_none=True)
def get_user(
    user_id: int,
    current_user: Annotated[User | None, Depends(get_optional_user)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Get a user's profile. The email is only shown to the user themselves."""
    return service.view(user_id, current_user)


@router.patch("/{user_id}", response_model=MessageResponse)
def update_user(
    account: Annotated[User, Depends(get_own_account)],
    user_data: UserUpdate,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Update your own profile."""
    service.update(account, user_data)
    return MessageResponse(message="User updated")
