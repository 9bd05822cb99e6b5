"""Pydantic schema for the JSON assessment returned by the language model."""

from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.matching.models import MatchResult

MAX_REASONS = 3
MAX_PERSONALIZED_REASONS = 5


class AIMatchAnalysis(BaseModel):
    """Model answer for one designer/brief pair.

    Unknown keys are ignored. A missing or out-of-range score, or an empty
    reasons list, fails validation and the answer is discarded.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    score: Annotated[float, Field(ge=0, le=100)]
    confidence: Literal["high", "medium", "low"] = "medium"
    reasons: Annotated[list[str], Field(min_length=1)]
    personalized_reasons: list[str] = Field(default_factory=list, alias="personalizedReasons")
    strengths: list[str] = Field(default_factory=list)
    challenges: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    unique_value: Optional[str] = Field(default=None, alias="uniqueValue")
    risk_level: Optional[Literal["low", "medium", "high"]] = Field(default=None, alias="riskLevel")
    match_summary: Optional[str] = Field(default=None, alias="matchSummary")

    @field_validator("confidence", "risk_level", mode="before")
    @classmethod
    def normalize_label(cls, v):
        """Accept labels in any case ("High" -> "high")."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("reasons", "personalized_reasons", "strengths", "challenges", "weaknesses")
    @classmethod
    def drop_blank_entries(cls, v: list[str]) -> list[str]:
        return [item.strip() for item in v if item and item.strip()]

    @field_validator("reasons")
    @classmethod
    def require_reason(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("reasons must contain at least one non-blank entry")
        return v

    def to_match_result(self, provider: str) -> MatchResult:
        """Convert to the provider-independent MatchResult."""
        personalized = self.personalized_reasons or self.reasons + self.strengths
        return MatchResult(
            score=int(round(self.score)),
            reasons=self.reasons[:MAX_REASONS],
            personalized_reasons=personalized[:MAX_PERSONALIZED_REASONS],
            confidence=self.confidence,
            provider=provider,
            match_summary=self.match_summary,
            unique_value=self.unique_value,
            challenges=self.challenges or self.weaknesses,
            risk_level=self.risk_level,
        )
