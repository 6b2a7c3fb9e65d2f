"""Category model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base


class Category(Base):
    """Petition category. Reference data, seeded rather than created through the API."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(64), unique=True, nullable=False)

    petitions = relationship("Petition", back_populates="category")


DEFAULT_CATEGORIES = [
    "Wildlife",
    "Environmental Causes",
    "Animal Rights",
    "Health and Wellness",
    "Education",
    "Human Rights",
    "Technology and Innovation",
    "Arts and Culture",
    "Community Development",
    "Economic Empowerment",
    "Science and Research",
    "Sports and Recreation",
]
