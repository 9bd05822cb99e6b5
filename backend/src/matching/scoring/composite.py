"""AI scoring with a rule-based safety net."""

import asyncio
from typing import Optional

from domain.matching.errors import AllProvidersFailedError
from domain.matching.models import BriefProfile, DesignerProfile, MatchResult
from domain.matching.ports import ScoringProviderPort
from observability.logging_config import get_logger
from observability.metrics import scoring_calls_total, scoring_fallbacks_total

logger = get_logger(__name__)


class AIProviderWithFallback(ScoringProviderPort):
    """Runs the primary provider and falls back to the rule-based one.

    The fallback is used when the primary:
    - is not configured (``primary`` is None)
    - raises any exception
    - does not answer within ``timeout_seconds``
    - returns no result
    - returns a score below ``min_valid_score`` (0 disables this check)

    When the fallback also raises, AllProvidersFailedError is raised.
    """

    def __init__(
        self,
        primary: Optional[ScoringProviderPort],
        fallback: ScoringProviderPort,
        timeout_seconds: float = 25.0,
        min_valid_score: int = 50,
    ):
        self.primary = primary
        self.fallback = fallback
        self.timeout_seconds = timeout_seconds
        self.min_valid_score = min_valid_score
        self.name = primary.name if primary is not None else fallback.name

    async def score(self, designer: DesignerProfile, brief: BriefProfile) -> MatchResult:
        if self.primary is None:
            return await self._fall_back(designer, brief, "no_primary")

        try:
            result = await asyncio.wait_for(
                self.primary.score(designer, brief),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            scoring_calls_total.labels(provider=self.primary.name, status="error").inc()
            return await self._fall_back(designer, brief, "timeout")
        except Exception as e:
            scoring_calls_total.labels(provider=self.primary.name, status="error").inc()
            logger.warning(
                f"Primary scoring failed: {str(e)}",
                extra={"designer_id": designer.id, "provider": self.primary.name},
            )
            return await self._fall_back(designer, brief, "error")

        scoring_calls_total.labels(provider=self.primary.name, status="success").inc()

        if result is None:
            return await self._fall_back(designer, brief, "empty")
        if result.score < self.min_valid_score:
            return await self._fall_back(designer, brief, "low_score")
        return result

    async def _fall_back(self, designer: DesignerProfile, brief: BriefProfile, reason: str) -> MatchResult:
        scoring_fallbacks_total.labels(reason=reason).inc()
        logger.info(
            f"Using fallback scoring ({reason})",
            extra={"designer_id": designer.id, "brief_id": brief.id, "reason": reason},
        )
        try:
            result = await self.fallback.score(designer, brief)
        except Exception as e:
            scoring_calls_total.labels(provider=self.fallback.name, status="error").inc()
            raise AllProvidersFailedError(
                f"All scoring providers failed for designer {designer.id}: {str(e)}"
            ) from e
        scoring_calls_total.labels(provider=self.fallback.name, status="success").inc()
        return result
