"""Match orchestrator: runs one matching cycle for a brief.

Pipeline:
1. Load the brief and check it carries category, budget and timeline
2. Reuse the brief's existing match when asked to
3. Collect candidates, drop designers already matched to the client,
   drop infeasible designers
4. Quick-score the feasible set with the rule-based scorer (instant phase)
5. Score the shortlist concurrently with the injected provider (refined phase)
6. Rank, persist the top match, return it with alternatives (final phase)

Both the single-response and the streaming endpoints consume the same event
generator; the single-response mode keeps only the final event.
"""

import asyncio
import time
from contextlib import aclosing
from dataclasses import dataclass, field
from typing import AsyncIterator, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from domain.matching.catalog import BudgetRange, TimelineType
from domain.matching.errors import (
    AllProvidersFailedError,
    BriefNotFoundError,
    InvalidBriefError,
    MatchingError,
)
from domain.matching.filters import exclude, filter_feasible
from domain.matching.models import BriefProfile, DesignerProfile, MatchResult, ScoredCandidate
from domain.matching.phases import PHASE_CONFIDENCE, MatchPhase, PhaseTracker
from domain.matching.ports import ScoringProviderPort
from domain.matching.ranking import rank
from domain.matching.status import RunState, RunStateMachine
from models.match import Match
from observability.logging_config import get_logger
from observability.metrics import (
    match_candidates,
    match_phases_emitted_total,
    match_run_duration_seconds,
    match_runs_total,
    match_score_histogram,
)
from .repository import BriefRepository, DesignerRepository, MatchRepository
from .scoring.fallback_provider import FallbackScoringProvider

logger = get_logger(__name__)

OUTCOME_MATCHED = "matched"
OUTCOME_REUSED = "reused"
OUTCOME_NO_CANDIDATES = "no_candidates"


@dataclass
class MatchOutcome:
    """A designer with its score and, once persisted, its match row id."""
    designer: DesignerProfile
    result: MatchResult
    match_id: Optional[UUID] = None
    status: Optional[str] = None


@dataclass
class PhaseEvent:
    """One progressive update for the caller.

    ``match`` is None only on a final event with outcome ``no_candidates``.
    """
    phase: MatchPhase
    outcome: str
    match: Optional[MatchOutcome]
    elapsed_ms: int
    alternatives: list[MatchOutcome] = field(default_factory=list)

    @property
    def confidence(self) -> str:
        return PHASE_CONFIDENCE[self.phase]


def validate_brief(brief: BriefProfile) -> None:
    """Raise InvalidBriefError unless category, budget and timeline are usable."""
    missing = [
        name for name in ("design_category", "budget_range", "timeline_type")
        if not getattr(brief, name)
    ]
    if missing:
        raise InvalidBriefError(f"Brief {brief.id} is missing: {', '.join(missing)}")
    try:
        BudgetRange(brief.budget_range)
        TimelineType(brief.timeline_type)
    except ValueError as e:
        raise InvalidBriefError(f"Brief {brief.id} is invalid: {str(e)}") from e


class MatchOrchestrator:
    """Runs matching cycles against one database session.

    The scoring provider is injected; the orchestrator never builds one.
    """

    def __init__(
        self,
        db: Session,
        scorer: ScoringProviderPort,
        quick_scorer: Optional[FallbackScoringProvider] = None,
        max_candidates: int = 10,
        alternatives: int = 3,
    ):
        """
        Args:
            db: Database session used for every read and write of the run
            scorer: Provider that produces the refined and final scores
            quick_scorer: Rule-based scorer for the instant phase and shortlisting
            max_candidates: Number of quick-ranked candidates sent to ``scorer``
            alternatives: Number of runner-up designers returned with the final phase
        """
        self.briefs = BriefRepository(db)
        self.designers = DesignerRepository(db)
        self.matches = MatchRepository(db)
        self.scorer = scorer
        self.quick_scorer = quick_scorer or FallbackScoringProvider(jitter=0)
        self.max_candidates = max_candidates
        self.alternatives = alternatives

    async def find_match(self, brief_id: UUID) -> PhaseEvent:
        """Return the brief's match, running a cycle only if it has none.

        Calling this twice for the same brief returns the same match id.
        """
        return await self._final_event(brief_id, reuse_existing=True, mode="single")

    async def find_new_match(self, brief_id: UUID) -> PhaseEvent:
        """Run a fresh cycle even if the brief already has a match.

        Designers matched to the client before are excluded, so the result
        is always a designer the client has not seen.
        """
        return await self._final_event(brief_id, reuse_existing=False, mode="find_new")

    def stream(self, brief_id: UUID) -> AsyncIterator[PhaseEvent]:
        """Progressive run: instant, refined and final events in that order.

        Closing the iterator early cancels the scoring calls still in flight.
        """
        return self._run(brief_id, reuse_existing=True, progressive=True, mode="stream")

    async def _final_event(self, brief_id: UUID, reuse_existing: bool, mode: str) -> PhaseEvent:
        final = None
        async for event in self._run(brief_id, reuse_existing=reuse_existing, progressive=False, mode=mode):
            final = event
        return final

    async def _run(
        self,
        brief_id: UUID,
        reuse_existing: bool,
        progressive: bool,
        mode: str,
    ) -> AsyncIterator[PhaseEvent]:
        started = time.perf_counter()
        run = RunStateMachine()
        tracker = PhaseTracker()

        def event(phase, outcome, match, alternatives=()):
            tracker.mark(phase)
            match_phases_emitted_total.labels(phase=phase.value).inc()
            return PhaseEvent(
                phase=phase,
                outcome=outcome,
                match=match,
                elapsed_ms=int((time.perf_counter() - started) * 1000),
                alternatives=list(alternatives),
            )

        def finish(outcome):
            run.advance(RunState.STREAMING_COMPLETE)
            match_runs_total.labels(mode=mode, outcome=outcome).inc()
            match_run_duration_seconds.labels(mode=mode).observe(time.perf_counter() - started)
            logger.info(
                f"Matching run finished: {outcome}",
                extra={"brief_id": brief_id, "duration_ms": int((time.perf_counter() - started) * 1000)},
            )

        try:
            brief = self.briefs.get(brief_id)
            if brief is None:
                raise BriefNotFoundError(f"Brief {brief_id} not found")
            validate_brief(brief)

            if reuse_existing:
                existing = self._existing_outcome(brief)
                if existing is not None:
                    finish(OUTCOME_REUSED)
                    yield event(MatchPhase.FINAL, OUTCOME_REUSED, existing)
                    return

            candidates = self.designers.find_candidates(brief.design_category)
            run.advance(RunState.FILTERING)
            remaining = exclude(candidates, self.matches.matched_designer_ids(brief.client_id))
            feasible = filter_feasible(remaining, brief)
            self._observe_funnel(brief, candidates, remaining, feasible)

            if not feasible:
                finish(OUTCOME_NO_CANDIDATES)
                yield event(MatchPhase.FINAL, OUTCOME_NO_CANDIDATES, None)
                return

            quick_ranked = rank(
                ScoredCandidate(d, self.quick_scorer.evaluate(d, brief)) for d in feasible
            )
            if progressive:
                top = quick_ranked[0]
                yield event(MatchPhase.INSTANT, OUTCOME_MATCHED, MatchOutcome(top.designer, top.result))

            run.advance(RunState.SCORING)
            shortlist = [c.designer for c in quick_ranked[:self.max_candidates]]
            match_candidates.labels(stage="shortlisted").observe(len(shortlist))

            scored: list[ScoredCandidate] = []
            async with aclosing(self._score_concurrently(shortlist, brief)) as scores:
                async for candidate in scores:
                    scored.append(candidate)
                    if progressive and tracker.should_emit(MatchPhase.REFINED):
                        best = rank(scored)[0]
                        yield event(MatchPhase.REFINED, OUTCOME_MATCHED, MatchOutcome(best.designer, best.result))

            if not scored:
                raise AllProvidersFailedError(
                    f"No candidate could be scored for brief {brief_id}"
                )

            run.advance(RunState.RANKING)
            ranked = rank(scored)
            primary = ranked[0]

            run.advance(RunState.PERSISTING)
            row, created = self.matches.create_or_get(brief, primary.designer.id, primary.result)
            match_score_histogram.labels(provider=primary.result.provider).observe(row.score)
            logger.info(
                "Match persisted" if created else "Match reused after duplicate insert",
                extra={"brief_id": brief.id, "designer_id": primary.designer.id, "match_id": row.id},
            )

            alternatives = [
                MatchOutcome(c.designer, c.result) for c in ranked[1:1 + self.alternatives]
            ]
            finish(OUTCOME_MATCHED)
            yield event(
                MatchPhase.FINAL,
                OUTCOME_MATCHED,
                MatchOutcome(primary.designer, primary.result, match_id=row.id, status=row.status),
                alternatives,
            )
        except MatchingError as e:
            run.fail()
            match_runs_total.labels(mode=mode, outcome="error").inc()
            logger.warning(
                f"Matching run failed: {e.code}",
                extra={"brief_id": brief_id, "reason": e.message},
            )
            raise

    async def _score_concurrently(
        self,
        designers: Sequence[DesignerProfile],
        brief: BriefProfile,
    ) -> AsyncIterator[ScoredCandidate]:
        """Yield scored candidates in completion order, skipping failures."""
        tasks = [asyncio.create_task(self._score_one(d, brief)) for d in designers]
        try:
            for next_done in asyncio.as_completed(tasks):
                candidate = await next_done
                if candidate is not None:
                    yield candidate
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

    async def _score_one(self, designer: DesignerProfile, brief: BriefProfile) -> Optional[ScoredCandidate]:
        try:
            result = await self.scorer.score(designer, brief)
        except Exception as e:
            logger.warning(
                f"Dropping candidate that could not be scored: {str(e)}",
                extra={"brief_id": brief.id, "designer_id": designer.id},
            )
            return None
        return ScoredCandidate(designer, result)

    def _existing_outcome(self, brief: BriefProfile) -> Optional[MatchOutcome]:
        existing: list[Match] = self.matches.get_for_brief(brief.id)
        if not existing:
            return None
        row = existing[0]
        designer = self.designers.get(row.designer_id)
        if designer is None:
            return None
        result = MatchResult(
            score=row.score,
            reasons=list(row.reasons or []),
            personalized_reasons=list(row.personalized_reasons or []),
            confidence=row.confidence or "medium",
            provider=row.provider or "unknown",
        )
        return MatchOutcome(designer, result, match_id=row.id, status=row.status)

    @staticmethod
    def _observe_funnel(brief, candidates, remaining, feasible) -> None:
        match_candidates.labels(stage="collected").observe(len(candidates))
        match_candidates.labels(stage="after_exclusion").observe(len(remaining))
        match_candidates.labels(stage="feasible").observe(len(feasible))
        logger.info(
            f"Candidates: {len(candidates)} collected, {len(remaining)} after exclusion, "
            f"{len(feasible)} feasible",
            extra={"brief_id": brief.id, "candidates": len(feasible)},
        )
