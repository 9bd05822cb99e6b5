"""Match feedback services

This module provides:
- Recording a client's verdict on a match
- Folding completed-project feedback into the designer's performance metrics
- Aggregating feedback for quality monitoring
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.matching.errors import FeedbackAlreadyRecordedError, MatchNotFoundError
from models.designer import Designer
from models.match import Match
from observability.logging_config import get_logger
from observability.metrics import match_feedback_total
from .models import MatchFeedback

logger = get_logger(__name__)


@dataclass(frozen=True)
class DesignerMetrics:
    """Performance metrics kept on the designer row."""
    rating: float
    on_time_delivery_rate: Optional[float]
    total_projects: int


def apply_project_outcome(
    current: DesignerMetrics,
    satisfaction: Optional[int],
    delivered_on_time: Optional[bool],
) -> DesignerMetrics:
    """Fold one completed project into the designer's running metrics.

    Rating is the mean satisfaction over completed projects and the on-time
    rate is a percentage. A metric with no prior value (rating 0 or rate
    None) restarts from this project alone. An outcome left unanswered
    leaves its metric unchanged.

    Args:
        current: Metrics before this project
        satisfaction: Client satisfaction, 1..5
        delivered_on_time: Whether the project met its timeline

    Returns:
        DesignerMetrics: Updated metrics, total_projects incremented
    """
    prior = current.total_projects
    total = prior + 1

    rating = current.rating
    if satisfaction is not None:
        if prior == 0 or not current.rating:
            rating = float(satisfaction)
        else:
            rating = round((current.rating * prior + satisfaction) / total, 2)

    rate = current.on_time_delivery_rate
    if delivered_on_time is not None:
        hit = 1 if delivered_on_time else 0
        if prior == 0 or rate is None:
            rate = float(hit * 100)
        else:
            rate = round((rate / 100 * prior + hit) / total * 100, 1)

    return DesignerMetrics(rating=rating, on_time_delivery_rate=rate, total_projects=total)


class FeedbackService:
    """Service for client feedback on matches."""

    @staticmethod
    def record_feedback(
        db: Session,
        match_id: UUID,
        accepted: bool,
        project_started: bool = False,
        project_completed: bool = False,
        satisfaction: Optional[int] = None,
        delivered_on_time: Optional[bool] = None,
        comment: Optional[str] = None,
    ) -> tuple[MatchFeedback, Designer]:
        """Store feedback for a match and update the designer when the project completed.

        Args:
            db: Database session
            match_id: Match the feedback is about
            accepted: Whether the client accepted the designer
            project_started: Whether work began
            project_completed: Whether the project was delivered
            satisfaction: Client satisfaction, 1..5
            delivered_on_time: Whether the project met its timeline
            comment: Free-text comment

        Returns:
            (feedback, designer) after commit

        Raises:
            MatchNotFoundError: If the match does not exist
            FeedbackAlreadyRecordedError: If the match already has feedback
        """
        match = db.get(Match, match_id)
        if match is None:
            raise MatchNotFoundError(f"Match {match_id} not found")

        if FeedbackService.get_for_match(db, match_id) is not None:
            raise FeedbackAlreadyRecordedError(f"Feedback for match {match_id} already recorded")

        feedback = MatchFeedback(
            match_id=match.id,
            designer_id=match.designer_id,
            client_id=match.client_id,
            accepted=accepted,
            project_started=project_started or project_completed,
            project_completed=project_completed,
            satisfaction=satisfaction,
            delivered_on_time=delivered_on_time,
            comment=comment,
        )
        db.add(feedback)

        designer = db.get(Designer, match.designer_id)
        if project_completed:
            updated = apply_project_outcome(
                DesignerMetrics(
                    rating=designer.rating or 0.0,
                    on_time_delivery_rate=designer.on_time_delivery_rate,
                    total_projects=designer.total_projects or 0,
                ),
                satisfaction,
                delivered_on_time,
            )
            designer.rating = updated.rating
            designer.on_time_delivery_rate = updated.on_time_delivery_rate
            designer.total_projects = updated.total_projects

        try:
            db.commit()
        except IntegrityError as e:
            # A concurrent submission for the same match won the unique constraint
            db.rollback()
            raise FeedbackAlreadyRecordedError(
                f"Feedback for match {match_id} already recorded"
            ) from e

        db.refresh(feedback)
        db.refresh(designer)

        match_feedback_total.labels(
            accepted=str(accepted).lower(),
            completed=str(project_completed).lower(),
        ).inc()
        logger.info(
            "Match feedback recorded",
            extra={"match_id": match.id, "designer_id": designer.id},
        )
        return feedback, designer

    @staticmethod
    def get_for_match(db: Session, match_id: UUID) -> Optional[MatchFeedback]:
        stmt = select(MatchFeedback).where(MatchFeedback.match_id == match_id)
        return db.execute(stmt).scalars().first()

    @staticmethod
    def summarize(db: Session) -> Dict[str, Any]:
        """Aggregate all feedback.

        Rates are percentages rounded to one decimal and are None when
        nothing was counted for them.

        Returns:
            Dict with total, accepted, completed, acceptance_rate,
            average_satisfaction and on_time_rate
        """
        row = db.execute(
            select(
                func.count(MatchFeedback.id),
                func.sum(case((MatchFeedback.accepted.is_(True), 1), else_=0)),
                func.sum(case((MatchFeedback.project_completed.is_(True), 1), else_=0)),
                func.avg(MatchFeedback.satisfaction),
                func.count(MatchFeedback.delivered_on_time),
                func.sum(case((MatchFeedback.delivered_on_time.is_(True), 1), else_=0)),
            )
        ).one()
        total, accepted, completed, avg_satisfaction, timed, on_time = row
        accepted = int(accepted or 0)
        on_time = int(on_time or 0)

        return {
            "total": total,
            "accepted": accepted,
            "completed": int(completed or 0),
            "acceptance_rate": round(accepted / total * 100, 1) if total else None,
            "average_satisfaction": round(float(avg_satisfaction), 2) if avg_satisfaction is not None else None,
            "on_time_rate": round(on_time / timed * 100, 1) if timed else None,
        }
