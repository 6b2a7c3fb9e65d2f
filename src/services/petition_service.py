"""Petition search, detail and mutation service."""

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from src.models.category import Category
from src.models.enums import PetitionSort
from src.models.petition import Petition, Supporter, SupportTier
from src.models.user import User
from src.schemas.category import CategoryResponse
from src.schemas.petition import (
    PetitionCreate,
    PetitionDetail,
    PetitionSummary,
    PetitionUpdate,
    SupportTierResponse,
)

logger = logging.getLogger(__name__)


@dataclass
class PetitionFilter:
    """Search options for listing petitions. ``None`` means "not filtered"."""

    q: str | None = None
    category_ids: list[int] | None = None
    supporting_cost: int | None = None
    owner_id: int | None = None
    supporter_id: int | None = None
    sort_by: PetitionSort = PetitionSort.CREATED_ASC
    start_index: int = 0
    count: int | None = None


def supporter_count_expr():
    """Correlated count of supporters for the enclosing petition row."""
    return (
        select(func.count(Supporter.id))
        .where(Supporter.petition_id == Petition.id)
        .correlate(Petition)
        .scalar_subquery()
    )


def supporting_cost_expr():
    """Cheapest tier cost for the enclosing petition row."""
    return (
        select(func.min(SupportTier.cost))
        .where(SupportTier.petition_id == Petition.id)
        .correlate(Petition)
        .scalar_subquery()
    )


def sort_clauses(sort_by: PetitionSort, supporting_cost) -> list:
    """ORDER BY for a sort option, always tie-broken by petition id."""
    if sort_by == PetitionSort.ALPHABETICAL_ASC:
        primary = Petition.title.asc()
    elif sort_by == PetitionSort.ALPHABETICAL_DESC:
        primary = Petition.title.desc()
    elif sort_by == PetitionSort.COST_ASC:
        primary = supporting_cost.asc()
    elif sort_by == PetitionSort.COST_DESC:
        primary = supporting_cost.desc()
    elif sort_by == PetitionSort.CREATED_DESC:
        primary = Petition.creation_date.desc()
    else:
        primary = Petition.creation_date.asc()
    return [primary, Petition.id.asc()]


class PetitionService:
    """Service for petition queries and owner-only petition mutations."""

    def __init__(self, db: Session):
        self.db = db

    # --- Queries ---

    def _apply_filters(self, query: Query, filters: PetitionFilter) -> Query:
        if filters.q:
            query = query.filter(
                Petition.title.icontains(filters.q, autoescape=True)
                | Petition.description.icontains(filters.q, autoescape=True)
            )
        if filters.category_ids:
            query = query.filter(Petition.category_id.in_(filters.category_ids))
        if filters.supporting_cost is not None:
            # Included when any tier is affordable
            query = query.filter(
                Petition.support_tiers.any(SupportTier.cost <= filters.supporting_cost)
            )
        if filters.owner_id is not None:
            query = query.filter(Petition.owner_id == filters.owner_id)
        if filters.supporter_id is not None:
            query = query.filter(
                Petition.supporters.any(Supporter.user_id == filters.supporter_id)
            )
        return query

    def list_petitions(self, filters: PetitionFilter) -> tuple[list[PetitionSummary], int]:
        """Return one page of matching petitions and the total number of matches."""
        total = self._apply_filters(self.db.query(Petition), filters).count()

        number_of_supporters = supporter_count_expr()
        supporting_cost = supporting_cost_expr()
        query = self.db.query(
            Petition,
            User.first_name,
            User.last_name,
            number_of_supporters.label("number_of_supporters"),
            supporting_cost.label("supporting_cost"),
        ).join(User, Petition.owner_id == User.id)
        query = self._apply_filters(query, filters)
        query = query.order_by(*sort_clauses(filters.sort_by, supporting_cost))

        if filters.start_index:
            query = query.offset(filters.start_index)
        if filters.count is not None:
            query = query.limit(filters.count)

        petitions = [
            PetitionSummary(
                petition_id=petition.id,
                title=petition.title,
                category_id=petition.category_id,
                owner_id=petition.owner_id,
                owner_first_name=first_name,
                owner_last_name=last_name,
                number_of_supporters=supporters or 0,
                creation_date=petition.creation_date,
                supporting_cost=cost,
            )
            for petition, first_name, last_name, supporters, cost in query.all()
        ]
        return petitions, total

    def get_petition_detail(self, petition_id: int) -> PetitionDetail:
        """Full view of a petition with its tiers and pledge totals."""
        petition = self.db.query(Petition).filter(Petition.id == petition_id).first()
        if petition is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Petition not found")

        number_of_supporters, money_raised = (
            self.db.query(func.count(Supporter.id), func.coalesce(func.sum(SupportTier.cost), 0))
            .join(SupportTier, Supporter.support_tier_id == SupportTier.id)
            .filter(Supporter.petition_id == petition.id)
            .one()
        )
        tiers = petition.support_tiers

        return PetitionDetail(
            petition_id=petition.id,
            title=petition.title,
            description=petition.description,
            category_id=petition.category_id,
            owner_id=petition.owner_id,
            owner_first_name=petition.owner.first_name,
            owner_last_name=petition.owner.last_name,
            number_of_supporters=number_of_supporters,
            creation_date=petition.creation_date,
            supporting_cost=min((tier.cost for tier in tiers), default=None),
            money_raised=money_raised,
            support_tiers=[
                SupportTierResponse(
                    support_tier_id=tier.id,
                    title=tier.title,
                    description=tier.description,
                    cost=tier.cost,
                )
                for tier in tiers
            ],
        )

    def list_categories(self) -> list[CategoryResponse]:
        """All categories, in id order."""
        categories = self.db.query(Category).order_by(Category.id).all()
        return [CategoryResponse(category_id=c.id, name=c.name) for c in categories]

    # --- Validation helpers ---

    def _require_category(self, category_id: int) -> None:
        if not self.db.query(Category).filter(Category.id == category_id).first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="categoryId does not match any existing category",
            )

    def _require_unique_title(self, title: str, exclude_id: int | None = None) -> None:
        query = self.db.query(Petition.id).filter(Petition.title == title)
        if exclude_id is not None:
            query = query.filter(Petition.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Petition title already exists",
            )

    def _commit(self, conflict_detail: str) -> None:
        """Commit, mapping a uniqueness race to the same 403 as the explicit checks."""
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=conflict_detail,
            ) from None

    def _require_distinct_tier_titles(self, data: PetitionCreate) -> None:
        tier_titles = [tier.title for tier in data.support_tiers]
        if len(set(tier_titles)) != len(tier_titles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Support tier titles must be unique within a petition",
            )

    # --- Mutations ---

    def create_petition(self, owner: User, data: PetitionCreate) -> Petition:
        """Create a petition and all of its tiers in one transaction."""
        self._require_category(data.category_id)
        self._require_unique_title(data.title)
        self._require_distinct_tier_titles(data)

        # Tiers ride along with the petition so every insert happens at commit
        petition = Petition(
            title=data.title,
            description=data.description,
            category_id=data.category_id,
            owner_id=owner.id,
            support_tiers=[
                SupportTier(title=tier.title, description=tier.description, cost=tier.cost)
                for tier in data.support_tiers
            ],
        )
        self.db.add(petition)
        self._commit("Petition title or support tier title already exists")
        self.db.refresh(petition)
        logger.info(
            f"User {owner.id} created petition {petition.id} with {len(data.support_tiers)} tiers"
        )
        return petition

    def edit_petition(self, petition: Petition, data: PetitionUpdate) -> Petition:
        """Update any provided petition fields."""
        changes = data.model_dump(exclude_none=True)
        if not changes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No fields provided for update",
            )

        try:
            if "category_id" in changes:
                self._require_category(changes["category_id"])
            if "title" in changes:
                self._require_unique_title(changes["title"], exclude_id=petition.id)

            for field_name, value in changes.items():
                setattr(petition, field_name, value)
        except Exception:
            self.db.rollback()
            raise

        self._commit("Petition title already exists")
        self.db.refresh(petition)
        logger.info(f"Edited petition {petition.id}: {sorted(changes)}")
        return petition

    def delete_petition(self, petition: Petition) -> str | None:
        """Delete a petition without supporters. Returns its image filename for cleanup."""
        has_supporters = (
            self.db.query(Supporter.id).filter(Supporter.petition_id == petition.id).first()
        )
        if has_supporters:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Cannot delete a petition that has supporters",
            )

        image_filename = petition.image_filename
        petition_id = petition.id
        try:
            self.db.delete(petition)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Deleted petition {petition_id}")
        return image_filename

    def set_image_filename(self, petition: Petition, filename: str | None) -> str | None:
        """Point the petition at a new image and return the one it replaced."""
        previous = petition.image_filename
        petition.image_filename = filename
        self.db.commit()
        return previous
