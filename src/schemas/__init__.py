"""Pydantic schemas for API requests and responses."""

from src.schemas.base import CamelModel, MessageResponse
from src.schemas.category import CategoryResponse
from src.schemas.petition import (
    PetitionCreate,
    PetitionCreatedResponse,
    PetitionDetail,
    PetitionListResponse,
    PetitionSummary,
    PetitionUpdate,
    SupportTierCreate,
    SupportTierCreatedResponse,
    SupportTierResponse,
    SupportTierUpdate,
)
from src.schemas.supporter import SupporterCreate, SupporterCreatedResponse, SupporterResponse
from src.schemas.user import (
    LoginResponse,
    RegisterResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "CamelModel",
    "MessageResponse",
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "RegisterResponse",
    "LoginResponse",
    "UserResponse",
    "CategoryResponse",
    "PetitionCreate",
    "PetitionUpdate",
    "PetitionCreatedResponse",
    "PetitionSummary",
    "PetitionListResponse",
    "PetitionDetail",
    "SupportTierCreate",
    "SupportTierUpdate",
    "SupportTierResponse",
    "SupportTierCreatedResponse",
    "SupporterCreate",
    "SupporterResponse",
    "SupporterCreatedResponse",
]
