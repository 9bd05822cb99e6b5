"""Enumerations and lookup tables used by the feasibility rules."""

from enum import Enum


class BudgetRange(str, Enum):
    """Budget band selected by the client on the brief."""
    ENTRY = "entry"
    MID = "mid"
    PREMIUM = "premium"


class TimelineType(str, Enum):
    """Timeline selected by the client on the brief."""
    URGENT = "urgent"
    STANDARD = "standard"
    FLEXIBLE = "flexible"


class ProjectSize(str, Enum):
    """Project size a designer prefers to take on."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Availability(str, Enum):
    """Designer availability state."""
    AVAILABLE = "available"
    BUSY = "busy"
    UNAVAILABLE = "unavailable"


# Maximum acceptable turnaround (days) per timeline type
TIMELINE_MAX_DAYS = {
    TimelineType.URGENT: 7,
    TimelineType.STANDARD: 28,
    TimelineType.FLEXIBLE: 60,
}

# Project sizes compatible with each budget band
BUDGET_TO_SIZES = {
    BudgetRange.ENTRY: frozenset({ProjectSize.SMALL}),
    BudgetRange.MID: frozenset({ProjectSize.SMALL, ProjectSize.MEDIUM}),
    BudgetRange.PREMIUM: frozenset({ProjectSize.MEDIUM, ProjectSize.LARGE}),
}

ALL_PROJECT_SIZES = frozenset(ProjectSize)

# Turnaround assumed when a designer has no estimate for the brief's category
DEFAULT_TURNAROUND_DAYS = 14

# Availability states eligible for the candidate pool
MATCHABLE_AVAILABILITY = (Availability.AVAILABLE, Availability.BUSY)
