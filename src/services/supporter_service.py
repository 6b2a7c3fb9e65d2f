"""Supporter (pledge) service."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.petition import Petition, Supporter, SupportTier
from src.models.user import User
from src.schemas.supporter import SupporterCreate, SupporterResponse

logger = logging.getLogger(__name__)

ALREADY_SUPPORTED = "Already supported at this tier"


class SupporterService:
    """Service for listing and recording pledges."""

    def __init__(self, db: Session):
        self.db = db

    def list_supporters(self, petition: Petition) -> list[SupporterResponse]:
        """Supporters of a petition, newest first."""
        rows = (
            self.db.query(Supporter, User.first_name, User.last_name)
            .join(User, Supporter.user_id == User.id)
            .filter(Supporter.petition_id == petition.id)
            .order_by(Supporter.timestamp.desc(), Supporter.id.desc())
            .all()
        )
        return [
            SupporterResponse(
                support_id=supporter.id,
                support_tier_id=supporter.support_tier_id,
                message=supporter.message,
                supporter_id=supporter.user_id,
                supporter_first_name=first_name,
                supporter_last_name=last_name,
                timestamp=supporter.timestamp,
            )
            for supporter, first_name, last_name in rows
        ]

    def _already_supports(self, user: User, tier: SupportTier) -> bool:
        return (
            self.db.query(Supporter.id)
            .filter(Supporter.user_id == user.id, Supporter.support_tier_id == tier.id)
            .first()
            is not None
        )

    def add_supporter(self, petition: Petition, user: User, data: SupporterCreate) -> Supporter:
        """Pledge ``user`` to one of the petition's tiers.

        Self-support is rejected before this is called; here the tier must
        belong to the petition and the user must not already back it.
        """
        tier = (
            self.db.query(SupportTier)
            .filter(
                SupportTier.id == data.support_tier_id,
                SupportTier.petition_id == petition.id,
            )
            .first()
        )
        if tier is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Support tier does not exist for this petition",
            )

        if self._already_supports(user, tier):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ALREADY_SUPPORTED)

        supporter = Supporter(
            petition_id=petition.id,
            support_tier_id=tier.id,
            user_id=user.id,
            message=data.message,
        )
        self.db.add(supporter)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=ALREADY_SUPPORTED,
            ) from None
        self.db.refresh(supporter)
        logger.info(f"User {user.id} supported petition {petition.id} at tier {tier.id}")
        return supporter
