"""Rule-based scoring provider used when AI scoring is unavailable."""

import random
from typing import Optional

from domain.matching.catalog import Availability
from domain.matching.models import BriefProfile, DesignerProfile, MatchResult
from domain.matching.ports import ScoringProviderPort

BASE_SCORE = 60
PRIMARY_CATEGORY_BONUS = 5
STYLE_BONUS = 8
INDUSTRY_BONUS = 15
AVAILABLE_BONUS = 10
BUSY_BONUS = 5
EXPERIENCE_BONUS = 5
EXPERIENCE_THRESHOLD_YEARS = 5
RATING_THRESHOLD = 4.5

SCORE_MIN = 50
SCORE_MAX = 98

DEFAULT_REASONS = [
    "Strong portfolio in relevant design styles",
    "Experience with similar projects",
    "Available within your timeline",
]


def _lower_set(values) -> set[str]:
    return {str(v).strip().lower() for v in values or () if v}


def _industry_matches(designer_industries, brief_industry: Optional[str]) -> bool:
    if not brief_industry:
        return False
    wanted = brief_industry.strip().lower()
    return any(wanted in industry or industry in wanted for industry in _lower_set(designer_industries))


class FallbackScoringProvider(ScoringProviderPort):
    """Deterministic additive score clamped to [50, 98].

    Bonuses on a base of 60: primary category match +5, each shared style +8,
    industry match +15, available +10 or busy +5, five or more years of
    experience +5, and rating above 4.5 adds ten points per full rating point
    over the threshold. A jitter in [0, jitter) is added before clamping so
    otherwise identical designers do not tie.
    """

    name = "fallback"

    def __init__(self, jitter: float = 5.0, rng: Optional[random.Random] = None):
        """
        Args:
            jitter: Upper bound of the random offset; 0 makes scoring fully deterministic
            rng: Random source, injectable for reproducible tests
        """
        self.jitter = jitter
        self.rng = rng or random.Random()

    async def score(self, designer: DesignerProfile, brief: BriefProfile) -> MatchResult:
        return self.evaluate(designer, brief)

    def evaluate(self, designer: DesignerProfile, brief: BriefProfile) -> MatchResult:
        """Synchronous scoring, also used for the instant phase."""
        score = float(BASE_SCORE)
        reasons: list[str] = []
        personalized: list[str] = []

        if brief.design_category and brief.design_category in designer.primary_categories:
            score += PRIMARY_CATEGORY_BONUS
            personalized.append(f"Specializes in {brief.design_category} as a core discipline")

        designer_styles = _lower_set(designer.style_keywords)
        shared_styles = [s for s in brief.styles if s and s.strip().lower() in designer_styles]
        score += STYLE_BONUS * len(shared_styles)
        for style in shared_styles:
            reasons.append(f"Expertise in {style} design style")

        if _industry_matches(designer.industries, brief.industry):
            score += INDUSTRY_BONUS
            reasons.append(f"Experience in the {brief.industry} industry")
            personalized.append(f"Has worked with {brief.industry} clients before")

        if designer.availability == Availability.AVAILABLE.value:
            score += AVAILABLE_BONUS
            reasons.append("Available to start immediately")
        elif designer.availability == Availability.BUSY.value:
            score += BUSY_BONUS

        years = designer.years_experience or 0
        if years >= EXPERIENCE_THRESHOLD_YEARS:
            score += EXPERIENCE_BONUS
            personalized.append(f"{years} years of professional design experience")

        rating = designer.rating or 0.0
        if rating >= RATING_THRESHOLD:
            score += round((rating - RATING_THRESHOLD) * 10)
            personalized.append(f"Highly rated by past clients ({rating:.1f}/5)")

        if self.jitter > 0:
            score += self.rng.random() * self.jitter

        final_score = max(SCORE_MIN, min(SCORE_MAX, int(round(score))))

        return MatchResult(
            score=final_score,
            reasons=(reasons or DEFAULT_REASONS)[:3],
            personalized_reasons=(reasons + personalized)[:5] or DEFAULT_REASONS[:],
            confidence="fallback",
            provider=self.name,
            match_summary=None,
        )
