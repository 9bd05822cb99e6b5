"""Database access for the matching pipeline.

Repositories take a SQLAlchemy session and return the frozen value objects
from ``domain.matching.models`` so the pure stages stay session-free.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from domain.matching.catalog import MATCHABLE_AVAILABILITY
from domain.matching.errors import (
    InvalidStatusTransitionError,
    MatchNotFoundError,
    PersistenceError,
)
from domain.matching.models import BriefProfile, DesignerProfile, MatchResult
from domain.matching.status import MatchStatus, StateTransitionError, validate_transition
from models.brief import Brief
from models.designer import Designer
from models.match import Match
from observability.logging_config import get_logger

logger = get_logger(__name__)


def to_brief_profile(brief: Brief) -> BriefProfile:
    return BriefProfile(
        id=brief.id,
        client_id=brief.client_id,
        design_category=brief.design_category,
        budget_range=brief.budget_range,
        timeline_type=brief.timeline_type,
        industry=brief.industry,
        company_name=brief.company_name,
        description=brief.description,
        styles=tuple(brief.styles or ()),
        target_audience=brief.target_audience,
        brand_personality=brief.brand_personality,
    )


def to_designer_profile(designer: Designer) -> DesignerProfile:
    fields = {column.name: getattr(designer, column.name) for column in Designer.__table__.columns}
    return DesignerProfile(
        id=designer.id,
        availability=designer.availability,
        primary_categories=tuple(designer.primary_categories or ()),
        secondary_categories=tuple(designer.secondary_categories or ()),
        style_keywords=tuple(designer.style_keywords or ()),
        industries=tuple(designer.industries or ()),
        preferred_project_sizes=tuple(designer.preferred_project_sizes or ()),
        turnaround_times=dict(designer.turnaround_times or {}),
        years_experience=designer.years_experience or 0,
        rating=designer.rating or 0.0,
        fields=fields,
    )


class BriefRepository:
    """Read access to briefs."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, brief_id: UUID) -> Optional[BriefProfile]:
        brief = self.db.get(Brief, brief_id)
        return to_brief_profile(brief) if brief is not None else None


class DesignerRepository:
    """Read access to the designer catalog."""

    def __init__(self, db: Session):
        self.db = db

    def find_candidates(self, category: str) -> list[DesignerProfile]:
        """Approved, verified designers that are available or busy and list
        ``category`` among their primary or secondary categories.

        An empty list is a normal outcome.
        """
        # Category membership is checked in Python so the query stays
        # portable between JSONB and plain JSON columns
        stmt = (
            select(Designer)
            .where(
                Designer.is_approved.is_(True),
                Designer.is_verified.is_(True),
                Designer.availability.in_([a.value for a in MATCHABLE_AVAILABILITY]),
            )
            .order_by(Designer.created_at, Designer.id)
        )
        designers = self.db.execute(stmt).scalars().all()
        return [
            to_designer_profile(d)
            for d in designers
            if category in (d.primary_categories or []) or category in (d.secondary_categories or [])
        ]

    def get(self, designer_id: UUID) -> Optional[DesignerProfile]:
        designer = self.db.get(Designer, designer_id)
        return to_designer_profile(designer) if designer is not None else None


class MatchRepository:
    """Read and write access to persisted matches."""

    def __init__(self, db: Session):
        self.db = db

    def matched_designer_ids(self, client_id: UUID) -> set[UUID]:
        """Every designer already matched to the client, whatever the status."""
        stmt = select(Match.designer_id).where(Match.client_id == client_id)
        return set(self.db.execute(stmt).scalars().all())

    def get_for_brief(self, brief_id: UUID) -> list[Match]:
        stmt = (
            select(Match)
            .where(Match.brief_id == brief_id)
            .order_by(Match.score.desc(), Match.created_at, Match.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get(self, match_id: UUID) -> Optional[Match]:
        return self.db.get(Match, match_id)

    def find(self, brief_id: UUID, designer_id: UUID) -> Optional[Match]:
        stmt = select(Match).where(Match.brief_id == brief_id, Match.designer_id == designer_id)
        return self.db.execute(stmt).scalars().first()

    def create_or_get(
        self,
        brief: BriefProfile,
        designer_id: UUID,
        result: MatchResult,
    ) -> tuple[Match, bool]:
        """Insert a pending match, or return the row that already holds the pair.

        The (brief_id, designer_id) unique constraint decides races: the loser
        gets an IntegrityError, rolls back and reads the winning row.

        Returns:
            (match, created) where created is False for an existing row

        Raises:
            PersistenceError: If the write fails for any other reason
        """
        match = Match(
            brief_id=brief.id,
            designer_id=designer_id,
            client_id=brief.client_id,
            score=result.score,
            reasons=list(result.reasons),
            personalized_reasons=list(result.personalized_reasons),
            confidence=result.confidence,
            provider=result.provider,
            status=MatchStatus.PENDING.value,
        )
        try:
            self.db.add(match)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            existing = self.find(brief.id, designer_id)
            if existing is None:
                raise PersistenceError(f"Failed to save match: {str(e.orig)}") from e
            logger.info(
                "Match already exists, returning stored row",
                extra={"brief_id": brief.id, "designer_id": designer_id, "match_id": existing.id},
            )
            return existing, False
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to save match: {str(e)}") from e

        self.db.refresh(match)
        return match, True

    def transition_status(self, match_id: UUID, new_status: MatchStatus) -> Match:
        """Move a match along pending -> unlocked -> accepted.

        Raises:
            MatchNotFoundError: If the match does not exist
            InvalidStatusTransitionError: If the move is not allowed
        """
        match = self.get(match_id)
        if match is None:
            raise MatchNotFoundError(f"Match {match_id} not found")
        try:
            validate_transition(MatchStatus(match.status), new_status)
        except StateTransitionError as e:
            raise InvalidStatusTransitionError(str(e)) from e

        match.status = new_status.value
        self.db.commit()
        self.db.refresh(match)
        return match
