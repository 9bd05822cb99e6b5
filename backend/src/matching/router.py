"""Matching API endpoints.

Endpoints:
- POST /api/v1/match/find            Match a brief (reuses an existing match)
- POST /api/v1/match/find-new        Run a new cycle, excluding designers seen before
- GET  /api/v1/match/{brief_id}/stream   Progressive results as server-sent events
- GET  /api/v1/briefs/{brief_id}/matches Stored matches of a brief
- PATCH /api/v1/matches/{match_id}/status Advance a match status

MatchingError subclasses raised here are turned into ``{error, message}``
responses by the application's exception handler.
"""

from contextlib import aclosing
from typing import Callable
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from config import get_settings
from database import get_db
from domain.matching.errors import MatchingError
from domain.matching.ports import ScoringProviderPort
from observability.logging_config import get_logger
from .dependencies import get_scoring_provider, get_session_scope
from .orchestrator import MatchOrchestrator
from .repository import MatchRepository
from .schemas import (
    ErrorResponse,
    FindMatchRequest,
    FindMatchResponse,
    MatchListResponse,
    MatchStatusUpdateRequest,
    PhaseEventSchema,
    StoredMatchSchema,
)
from .streaming import SSE_HEADERS, SSE_MEDIA_TYPE, format_sse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["matching"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Brief lacks category, budget or timeline"},
    404: {"model": ErrorResponse, "description": "Brief not found"},
    500: {"model": ErrorResponse, "description": "Match could not be saved"},
    503: {"model": ErrorResponse, "description": "All scoring providers failed"},
}


def build_orchestrator(db: Session, scorer: ScoringProviderPort) -> MatchOrchestrator:
    settings = get_settings()
    return MatchOrchestrator(
        db,
        scorer,
        max_candidates=settings.MATCH_MAX_CANDIDATES,
        alternatives=settings.MATCH_ALTERNATIVES,
    )


@router.post("/match/find", response_model=FindMatchResponse, responses=ERROR_RESPONSES)
async def find_match(
    request: FindMatchRequest,
    db: Session = Depends(get_db),
    scorer: ScoringProviderPort = Depends(get_scoring_provider),
):
    """Find the best designer for a brief.

    If the brief already has a match it is returned unchanged, so repeating
    the call is idempotent. An empty ``matches`` list with status
    ``no_candidates`` means no designer qualified.
    """
    event = await build_orchestrator(db, scorer).find_match(request.brief_id)
    return FindMatchResponse.from_event(event)


@router.post("/match/find-new", response_model=FindMatchResponse, responses=ERROR_RESPONSES)
async def find_new_match(
    request: FindMatchRequest,
    db: Session = Depends(get_db),
    scorer: ScoringProviderPort = Depends(get_scoring_provider),
):
    """Run a new matching cycle for a brief.

    Every designer already matched to the brief's client is excluded.
    """
    event = await build_orchestrator(db, scorer).find_new_match(request.brief_id)
    return FindMatchResponse.from_event(event)


async def match_events(orchestrator: MatchOrchestrator, brief_id: UUID):
    """Render an orchestrator run as SSE frames.

    Closing this generator closes the run as well, which cancels scoring
    calls still in flight.
    """
    try:
        async with aclosing(orchestrator.stream(brief_id)) as events:
            async for event in events:
                payload = PhaseEventSchema.from_event(event).model_dump(mode="json")
                yield format_sse("match", payload)
    except MatchingError as e:
        yield format_sse("error", {"error": e.code, "message": e.message})
    except Exception as e:
        logger.error(
            f"Match stream failed: {str(e)}",
            extra={"brief_id": brief_id},
            exc_info=True,
        )
        yield format_sse("error", {
            "error": "internal_error",
            "message": "An unexpected error occurred. Please try again later.",
        })


@router.get("/match/{brief_id}/stream", response_class=StreamingResponse)
async def stream_match(
    brief_id: UUID,
    scorer: ScoringProviderPort = Depends(get_scoring_provider),
    session_scope: Callable = Depends(get_session_scope),
):
    """Stream instant, refined and final results as server-sent events.

    Each phase is sent as a ``match`` event; a fatal failure is sent as an
    ``error`` event carrying ``{error, message}``. A reused match or an empty
    candidate set produces a single ``final`` event.
    """

    async def event_source():
        with session_scope() as db:
            async with aclosing(match_events(build_orchestrator(db, scorer), brief_id)) as frames:
                async for frame in frames:
                    yield frame

    return StreamingResponse(event_source(), media_type=SSE_MEDIA_TYPE, headers=SSE_HEADERS)


@router.get("/briefs/{brief_id}/matches", response_model=MatchListResponse)
def list_brief_matches(brief_id: UUID, db: Session = Depends(get_db)):
    """List the matches stored for a brief, best first."""
    matches = MatchRepository(db).get_for_brief(brief_id)
    return MatchListResponse(
        matches=[StoredMatchSchema.model_validate(m) for m in matches],
        total=len(matches),
    )


@router.patch("/matches/{match_id}/status", response_model=StoredMatchSchema)
def update_match_status(
    match_id: UUID,
    request: MatchStatusUpdateRequest,
    db: Session = Depends(get_db),
):
    """Advance a match along pending -> unlocked -> accepted.

    Called by the payment and designer-response flows. Skipping or reversing
    a step answers 409.
    """
    match = MatchRepository(db).transition_status(match_id, request.status)
    logger.info(
        f"Match status changed to {match.status}",
        extra={"match_id": match.id, "brief_id": match.brief_id},
    )
    return StoredMatchSchema.model_validate(match)
