"""Scoring port for the matching pipeline.

Implementations:
- LLMScoringProvider: asks a language model for a structured assessment
- FallbackScoringProvider: deterministic rule-based score
- AIProviderWithFallback: composes the two
"""

from abc import ABC, abstractmethod

from .models import BriefProfile, DesignerProfile, MatchResult


class ScoringProviderError(Exception):
    """A single provider could not score a candidate."""
    pass


class ScoringProviderPort(ABC):
    """Port interface for designer/brief scoring."""

    name: str = "scoring"

    @abstractmethod
    async def score(self, designer: DesignerProfile, brief: BriefProfile) -> MatchResult:
        """Score one designer against a brief.

        Args:
            designer: Candidate that already passed the hard filters
            brief: Brief being matched

        Returns:
            MatchResult with a score in [0, 100]

        Raises:
            ScoringProviderError: If this provider cannot produce a result
        """
        pass
