"""Feedback API endpoints

- POST /api/v1/matches/{match_id}/feedback - Record the client's verdict on a match
- GET  /api/v1/feedback/summary            - Aggregate feedback for quality monitoring
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field, model_validator
from sqlalchemy.orm import Session

from database import get_db
from matching.schemas import ErrorResponse
from .services import FeedbackService


# Request/Response schemas
class MatchFeedbackRequest(BaseModel):
    """Client feedback on a match"""
    accepted: bool
    project_started: bool = False
    project_completed: bool = False
    satisfaction: Optional[int] = Field(default=None, ge=1, le=5)
    delivered_on_time: Optional[bool] = None
    comment: Optional[str] = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def completed_requires_accepted(self):
        if self.project_completed and not self.accepted:
            raise ValueError("a completed project requires an accepted match")
        return self


class DesignerMetricsSchema(BaseModel):
    """Designer performance metrics after the feedback was applied"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    rating: float
    on_time_delivery_rate: Optional[float]
    total_projects: int


class MatchFeedbackResponse(BaseModel):
    """Recorded feedback"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    match_id: UUID
    accepted: bool
    project_started: bool
    project_completed: bool
    satisfaction: Optional[int]
    delivered_on_time: Optional[bool]
    comment: Optional[str]
    created_at: Optional[datetime] = None
    designer: Optional[DesignerMetricsSchema] = None


class FeedbackSummaryResponse(BaseModel):
    """Feedback aggregated over all matches"""
    total: int
    accepted: int
    completed: int
    acceptance_rate: Optional[float]
    average_satisfaction: Optional[float]
    on_time_rate: Optional[float]


# Router
router = APIRouter(prefix="/api/v1", tags=["feedback"])


@router.post(
    "/matches/{match_id}/feedback",
    response_model=MatchFeedbackResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Match not found"},
        409: {"model": ErrorResponse, "description": "Feedback already recorded"},
    },
)
def record_match_feedback(
    match_id: UUID,
    request: MatchFeedbackRequest,
    db: Session = Depends(get_db),
):
    """Record whether the client accepted the match and how the project went.

    Feedback is accepted once per match. When the project completed, the
    satisfaction and on-time answers update the designer's rating, on-time
    delivery rate and project count.
    """
    feedback, designer = FeedbackService.record_feedback(
        db,
        match_id,
        accepted=request.accepted,
        project_started=request.project_started,
        project_completed=request.project_completed,
        satisfaction=request.satisfaction,
        delivered_on_time=request.delivered_on_time,
        comment=request.comment,
    )
    response = MatchFeedbackResponse.model_validate(feedback)
    response.designer = DesignerMetricsSchema.model_validate(designer)
    return response


@router.get("/feedback/summary", response_model=FeedbackSummaryResponse)
def get_feedback_summary(db: Session = Depends(get_db)):
    """Acceptance rate, average satisfaction and on-time rate over all feedback."""
    return FeedbackSummaryResponse(**FeedbackService.summarize(db))
