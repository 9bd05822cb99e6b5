"""Pydantic schemas for matching endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.matching.field_capabilities import public_view
from domain.matching.status import MatchStatus


class FindMatchRequest(BaseModel):
    """Request body for running a matching cycle."""
    brief_id: UUID


class MatchSchema(BaseModel):
    """A matched designer as shown to the client.

    ``designer`` holds only the fields flagged public in the designer field
    capability table. ``id`` is None for alternatives, which are not persisted.
    """
    id: Optional[UUID] = None
    designer_id: UUID
    designer: Dict[str, Any]
    score: int = Field(ge=0, le=100)
    reasons: List[str]
    personalized_reasons: List[str]
    confidence: str
    provider: str
    status: Optional[str] = None
    match_summary: Optional[str] = None
    unique_value: Optional[str] = None
    challenges: List[str] = Field(default_factory=list)
    risk_level: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome) -> "MatchSchema":
        result = outcome.result
        return cls(
            id=outcome.match_id,
            designer_id=outcome.designer.id,
            designer={"id": str(outcome.designer.id), **public_view(outcome.designer.fields)},
            score=result.score,
            reasons=result.reasons,
            personalized_reasons=result.personalized_reasons,
            confidence=result.confidence,
            provider=result.provider,
            status=outcome.status,
            match_summary=result.match_summary,
            unique_value=result.unique_value,
            challenges=result.challenges,
            risk_level=result.risk_level,
        )


class FindMatchResponse(BaseModel):
    """Result of a non-streaming matching run.

    ``matches`` is empty when no designer qualified; this is a normal result
    with status ``no_candidates``, never an error.
    """
    matches: List[MatchSchema]
    alternatives: List[MatchSchema] = Field(default_factory=list)
    status: str
    elapsed_ms: int

    @classmethod
    def from_event(cls, event) -> "FindMatchResponse":
        return cls(
            matches=[MatchSchema.from_outcome(event.match)] if event.match else [],
            alternatives=[MatchSchema.from_outcome(a) for a in event.alternatives],
            status=event.outcome,
            elapsed_ms=event.elapsed_ms,
        )


class PhaseEventSchema(BaseModel):
    """Payload of one ``match`` server-sent event."""
    phase: str
    status: str
    match: Optional[MatchSchema]
    confidence: str
    elapsed_ms: int
    alternatives: List[MatchSchema] = Field(default_factory=list)

    @classmethod
    def from_event(cls, event) -> "PhaseEventSchema":
        return cls(
            phase=event.phase.value,
            status=event.outcome,
            match=MatchSchema.from_outcome(event.match) if event.match else None,
            confidence=event.confidence,
            elapsed_ms=event.elapsed_ms,
            alternatives=[MatchSchema.from_outcome(a) for a in event.alternatives],
        )


class StoredMatchSchema(BaseModel):
    """A persisted match row."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    brief_id: UUID
    designer_id: UUID
    client_id: UUID
    score: int
    reasons: List[str]
    personalized_reasons: List[str]
    confidence: Optional[str]
    provider: Optional[str]
    status: str
    created_at: Optional[datetime] = None


class MatchListResponse(BaseModel):
    """Matches stored for a brief, best first."""
    matches: List[StoredMatchSchema]
    total: int


class MatchStatusUpdateRequest(BaseModel):
    """Request to move a match to its next status."""
    status: MatchStatus


class ErrorResponse(BaseModel):
    """Structured error body."""
    error: str
    message: str
