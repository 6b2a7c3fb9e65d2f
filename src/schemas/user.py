"""User and session schemas."""

from pydantic import EmailStr, Field

from src.schemas.base import CamelModel


class UserRegister(CamelModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=256)
    first_name: str = Field(..., min_length=1, max_length=64)
    last_name: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=6, max_length=64)


class UserLogin(CamelModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=256)
    password: str = Field(..., min_length=1, max_length=64)


class UserUpdate(CamelModel):
    """Profile update. Changing the password requires the current one."""

    email: EmailStr | None = Field(None, max_length=256)
    first_name: str | None = Field(None, min_length=1, max_length=64)
    last_name: str | None = Field(None, min_length=1, max_length=64)
    password: str | None = Field(None, min_length=6, max_length=64)
    current_password: str | None = Field(None, min_length=1, max_length=64)


class RegisterResponse(CamelModel):
    """Id of the newly registered user."""

    user_id: int


class LoginResponse(CamelModel):
    """Session token issued on login."""

    user_id: int
    token: str


class UserResponse(CamelModel):
    """Public profile. Email is only present when viewing your own account."""

    first_name: str
    last_name: str
    email: str | None = None
