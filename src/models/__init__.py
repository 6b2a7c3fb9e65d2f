"""SQLAlchemy models."""

from src.models.category import Category
from src.models.petition import Petition, Supporter, SupportTier
from src.models.user import User

__all__ = [
    "User",
    "Category",
    "Petition",
    "SupportTier",
    "Supporter",
]
