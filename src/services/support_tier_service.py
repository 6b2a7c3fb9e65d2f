"""Support tier service: owner-only tier mutations under the 1-3 tier rule."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.petition import MAX_SUPPORT_TIERS, Petition, Supporter, SupportTier
from src.schemas.petition import SupportTierCreate, SupportTierUpdate

logger = logging.getLogger(__name__)

DUPLICATE_TITLE = "Support tier title must be unique within the petition"


class SupportTierService:
    """Service for adding, editing and removing a petition's support tiers."""

    def __init__(self, db: Session):
        self.db = db

    def _get_tier(self, petition: Petition, tier_id: int) -> SupportTier:
        tier = (
            self.db.query(SupportTier)
            .filter(SupportTier.id == tier_id, SupportTier.petition_id == petition.id)
            .first()
        )
        if tier is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Support tier not found for this petition",
            )
        return tier

    def _require_no_supporters(self, tier: SupportTier, action: str) -> None:
        if self.db.query(Supporter.id).filter(Supporter.support_tier_id == tier.id).first():
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Cannot {action} a support tier once it has supporters",
            )

    def _title_taken(self, petition: Petition, title: str, exclude_id: int | None = None) -> bool:
        query = self.db.query(SupportTier.id).filter(
            SupportTier.petition_id == petition.id, SupportTier.title == title
        )
        if exclude_id is not None:
            query = query.filter(SupportTier.id != exclude_id)
        return query.first() is not None

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=DUPLICATE_TITLE,
            ) from None

    def add_support_tier(self, petition: Petition, data: SupportTierCreate) -> SupportTier:
        """Add a tier while the petition has fewer than the maximum."""
        tier_count = (
            self.db.query(SupportTier).filter(SupportTier.petition_id == petition.id).count()
        )
        if tier_count >= MAX_SUPPORT_TIERS:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"A petition cannot have more than {MAX_SUPPORT_TIERS} support tiers",
            )
        if self._title_taken(petition, data.title):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=DUPLICATE_TITLE)

        tier = SupportTier(
            petition_id=petition.id,
            title=data.title,
            description=data.description,
            cost=data.cost,
        )
        self.db.add(tier)
        self._commit()
        self.db.refresh(tier)
        logger.info(f"Added support tier {tier.id} to petition {petition.id}")
        return tier

    def edit_support_tier(
        self, petition: Petition, tier_id: int, data: SupportTierUpdate
    ) -> SupportTier:
        """Edit a tier that nobody has pledged to yet."""
        tier = self._get_tier(petition, tier_id)
        self._require_no_supporters(tier, "edit")

        changes = data.model_dump(exclude_none=True)
        if not changes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No fields provided for update",
            )

        try:
            if "title" in changes and self._title_taken(petition, changes["title"], tier.id):
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=DUPLICATE_TITLE)
            for field, value in changes.items():
                setattr(tier, field, value)
        except Exception:
            self.db.rollback()
            raise

        self._commit()
        self.db.refresh(tier)
        logger.info(f"Edited support tier {tier.id} of petition {petition.id}: {sorted(changes)}")
        return tier

    def delete_support_tier(self, petition: Petition, tier_id: int) -> None:
        """Remove a tier with no supporters, never the petition's last one."""
        tier = self._get_tier(petition, tier_id)
        self._require_no_supporters(tier, "delete")

        tier_count = (
            self.db.query(SupportTier).filter(SupportTier.petition_id == petition.id).count()
        )
        if tier_count <= 1:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Cannot remove the only support tier of a petition",
            )

        try:
            petition.support_tiers.remove(tier)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Deleted support tier {tier_id} of petition {petition.id}")
