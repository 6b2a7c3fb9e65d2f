"""User account service."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.user import User
from src.schemas.user import UserRegister, UserResponse, UserUpdate
from src.services.auth import create_user, get_password_hash, get_user_by_email, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Service for registration and profile operations."""

    def __init__(self, db: Session):
        self.db = db

    def register(self, data: UserRegister) -> User:
        """Register a new account; the email must not already be in use."""
        if get_user_by_email(self.db, data.email):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Email already in use",
            )
        try:
            return create_user(
                self.db, data.email, data.password, data.first_name, data.last_name
            )
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Email already in use",
            ) from None

    def get_user(self, user_id: int) -> User:
        """Load a user or 404."""
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    def view(self, user_id: int, requester: User | None) -> UserResponse:
        """Public profile, including the email only for the account holder."""
        user = self.get_user(user_id)
        is_self = requester is not None and requester.id == user.id
        return UserResponse(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email if is_self else None,
        )

    def update(self, user: User, data: UserUpdate) -> User:
        """Apply a profile update to the caller's own account."""
        changes = data.model_dump(exclude_none=True, exclude={"current_password"})
        if not changes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No fields provided for update",
            )

        if "email" in changes and changes["email"] != user.email:
            existing = get_user_by_email(self.db, changes["email"])
            if existing and existing.id != user.id:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Email already in use",
                )

        if "password" in changes:
            if not data.current_password:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="currentPassword is required to change the password",
                )
            if not verify_password(data.current_password, user.password_hash):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Incorrect current password",
                )
            if data.password == data.current_password:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="New password must differ from the current password",
                )
            user.password_hash = get_password_hash(changes.pop("password"))

        for field, value in changes.items():
            setattr(user, field, value)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Email already in use",
            ) from None
        self.db.refresh(user)
        logger.info(f"Updated user {user.id}: {sorted(data.model_fields_set)}")
        return user

    def set_image_filename(self, user: User, filename: str | None) -> str | None:
        """Point the user at a new image and return the one it replaced."""
        previous = user.image_filename
        user.image_filename = filename
        self.db.commit()
        return previous
