"""User model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(256), unique=True, nullable=False, index=True)
    first_name = Column(String(64), nullable=False)
    last_name = Column(String(64), nullable=False)
    password_hash = Column(String(255), nullable=False)
    # Single active session; cleared on logout
    auth_token = Column(String(512), unique=True, nullable=True, index=True)
    image_filename = Column(String(255), nullable=True)
