"""Petition, support tier and supporter models."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import utcnow

MAX_SUPPORT_TIERS = 3


class Petition(Base):
    """A campaign owned by a user, offering one to three support tiers."""

    __tablename__ = "petitions"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(128), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    creation_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    image_filename = Column(String(255), nullable=True)

    # Relationships
    category = relationship("Category", back_populates="petitions")
    owner = relationship("User")
    support_tiers = relationship(
        "SupportTier",
        back_populates="petition",
        cascade="all, delete-orphan",
        order_by="SupportTier.id",
    )
    supporters = relationship(
        "Supporter",
        back_populates="petition",
        cascade="all, delete-orphan",
    )


class SupportTier(Base):
    """A fixed-cost pledge option attached to a petition."""

    __tablename__ = "support_tiers"
    __table_args__ = (UniqueConstraint("petition_id", "title", name="uq_support_tier_title"),)

    id = Column(Integer, primary_key=True, index=True)
    petition_id = Column(
        Integer, ForeignKey("petitions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(128), nullable=False)
    description = Column(Text, nullable=False)
    cost = Column(Integer, nullable=False)

    petition = relationship("Petition", back_populates="support_tiers")
    supporters = relationship("Supporter", back_populates="support_tier")


class Supporter(Base):
    """A user's pledge at a specific support tier. Never edited once created."""

    __tablename__ = "supporters"
    __table_args__ = (
        UniqueConstraint("user_id", "support_tier_id", name="uq_supporter_user_tier"),
    )

    id = Column(Integer, primary_key=True, index=True)
    petition_id = Column(
        Integer, ForeignKey("petitions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    support_tier_id = Column(Integer, ForeignKey("support_tiers.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message = Column(String(512), nullable=True)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    petition = relationship("Petition", back_populates="supporters")
    support_tier = relationship("SupportTier", back_populates="supporters")
    user = relationship("User")
