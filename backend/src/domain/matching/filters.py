"""Pure candidate filters applied before any designer is scored."""

from typing import Iterable, Sequence
from uuid import UUID

from .catalog import (
    ALL_PROJECT_SIZES,
    BUDGET_TO_SIZES,
    DEFAULT_TURNAROUND_DAYS,
    TIMELINE_MAX_DAYS,
    Availability,
    BudgetRange,
    TimelineType,
)
from .models import BriefProfile, DesignerProfile


def exclude(
    candidates: Sequence[DesignerProfile],
    excluded_ids: Iterable[UUID],
) -> list[DesignerProfile]:
    """Drop candidates whose id is in ``excluded_ids``, preserving order.

    ``excluded_ids`` is the set of designers already matched to the client
    in any earlier cycle, whatever the status of those matches.
    """
    excluded = set(excluded_ids)
    return [d for d in candidates if d.id not in excluded]


def allowed_sizes(budget_range: str) -> frozenset:
    """Project sizes compatible with a budget band.

    Raises:
        ValueError: If the budget band is unknown
    """
    return BUDGET_TO_SIZES[BudgetRange(budget_range)]


def max_turnaround_days(timeline_type: str) -> int:
    """Maximum acceptable turnaround for a timeline type.

    Raises:
        ValueError: If the timeline type is unknown
    """
    return TIMELINE_MAX_DAYS[TimelineType(timeline_type)]


def turnaround_for(designer: DesignerProfile, category: str) -> int:
    """Designer's turnaround estimate for a category, in days."""
    days = (designer.turnaround_times or {}).get(category)
    if days is None:
        return DEFAULT_TURNAROUND_DAYS
    return int(days)


def budget_compatible(designer: DesignerProfile, brief: BriefProfile) -> bool:
    sizes = set(designer.preferred_project_sizes) or {s.value for s in ALL_PROJECT_SIZES}
    return any(size.value in sizes for size in allowed_sizes(brief.budget_range))


def timeline_compatible(designer: DesignerProfile, brief: BriefProfile) -> bool:
    return turnaround_for(designer, brief.design_category) <= max_turnaround_days(brief.timeline_type)


def is_feasible(designer: DesignerProfile, brief: BriefProfile) -> bool:
    """A designer is feasible when budget, timeline and availability all pass."""
    if designer.availability == Availability.UNAVAILABLE.value:
        return False
    return budget_compatible(designer, brief) and timeline_compatible(designer, brief)


def filter_feasible(
    candidates: Sequence[DesignerProfile],
    brief: BriefProfile,
) -> list[DesignerProfile]:
    """Keep the candidates that can take on the brief, preserving order."""
    return [d for d in candidates if is_feasible(d, brief)]
