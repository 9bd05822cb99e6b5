"""Value objects passed between the matching stages.

The ORM rows are converted into these frozen dataclasses by the repository
layer so filters, scorers and ranking never touch a database session.
"""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class BriefProfile:
    """Read-only view of a brief used as matching input.

    Attributes:
        id: Brief UUID
        client_id: Owning client UUID
        design_category: Requested design category (e.g. 'brand-identity')
        budget_range: entry, mid or premium
        timeline_type: urgent, standard or flexible
        industry: Client industry, free text
        styles: Desired style keywords
    """
    id: UUID
    client_id: UUID
    design_category: Optional[str]
    budget_range: Optional[str]
    timeline_type: Optional[str]
    industry: Optional[str] = None
    company_name: Optional[str] = None
    description: Optional[str] = None
    styles: tuple[str, ...] = ()
    target_audience: Optional[str] = None
    brand_personality: Optional[str] = None


@dataclass(frozen=True)
class DesignerProfile:
    """Read-only view of a designer catalog entry.

    ``fields`` holds every column of the row by name; the prompt builder and
    the public export read from it through the field capability table. The
    typed attributes are the ones the pure rules depend on.
    """
    id: UUID
    availability: str
    primary_categories: tuple[str, ...] = ()
    secondary_categories: tuple[str, ...] = ()
    style_keywords: tuple[str, ...] = ()
    industries: tuple[str, ...] = ()
    preferred_project_sizes: tuple[str, ...] = ()
    turnaround_times: dict = field(default_factory=dict, hash=False, compare=False)
    years_experience: int = 0
    rating: float = 0.0
    fields: dict = field(default_factory=dict, hash=False, compare=False)


@dataclass
class MatchResult:
    """Output of a scoring provider for one (designer, brief) pair.

    Attributes:
        score: Compatibility score, integer in [0, 100]
        reasons: Short reasons, at most 3
        personalized_reasons: Longer reasons, at most 5
        confidence: low, medium, high or fallback
        provider: Name of the provider that produced the score
    """
    score: int
    reasons: list[str]
    personalized_reasons: list[str]
    confidence: str
    provider: str
    match_summary: Optional[str] = None
    unique_value: Optional[str] = None
    challenges: list[str] = field(default_factory=list)
    risk_level: Optional[str] = None


@dataclass
class ScoredCandidate:
    """A designer paired with the result that scored it."""
    designer: DesignerProfile
    result: MatchResult
