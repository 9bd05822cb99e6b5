"""Declarative table of designer fields and where each may appear.

Both the AI prompt builder and the public designer export read this table,
so a field reaches the language model or a client only when it is listed
here with the matching flag set.
"""

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class FieldCapability:
    """Where a single designer field may be used.

    Attributes:
        name: Column name on the designer row
        label: Human-readable label used in prompts
        used_in_matching: Field may be embedded in the scoring prompt
        public: Field may be exported to clients viewing a match
    """
    name: str
    label: str
    used_in_matching: bool
    public: bool


DESIGNER_FIELDS: tuple[FieldCapability, ...] = (
    # Identity and contact details never leave the platform
    FieldCapability("first_name", "First name", used_in_matching=False, public=True),
    FieldCapability("last_name", "Last name", used_in_matching=False, public=False),
    FieldCapability("email", "Email", used_in_matching=False, public=False),
    FieldCapability("portfolio_url", "Portfolio", used_in_matching=False, public=False),
    FieldCapability("avatar_url", "Avatar", used_in_matching=False, public=True),
    # Professional profile
    FieldCapability("title", "Title", used_in_matching=True, public=True),
    FieldCapability("bio", "Bio", used_in_matching=True, public=True),
    FieldCapability("city", "City", used_in_matching=True, public=True),
    FieldCapability("country", "Country", used_in_matching=True, public=True),
    FieldCapability("primary_categories", "Primary categories", used_in_matching=True, public=True),
    FieldCapability("secondary_categories", "Secondary categories", used_in_matching=True, public=True),
    FieldCapability("style_keywords", "Design styles", used_in_matching=True, public=True),
    FieldCapability("industries", "Industries", used_in_matching=True, public=True),
    FieldCapability("preferred_project_sizes", "Preferred project sizes", used_in_matching=True, public=False),
    FieldCapability("turnaround_times", "Turnaround (days) per category", used_in_matching=True, public=False),
    FieldCapability("availability", "Availability", used_in_matching=True, public=True),
    # Performance metrics
    FieldCapability("years_experience", "Years of experience", used_in_matching=True, public=True),
    FieldCapability("rating", "Rating (out of 5)", used_in_matching=True, public=True),
    FieldCapability("total_projects", "Completed projects", used_in_matching=True, public=True),
    FieldCapability("on_time_delivery_rate", "On-time delivery (%)", used_in_matching=True, public=False),
    # Administrative state
    FieldCapability("is_approved", "Approved", used_in_matching=False, public=False),
    FieldCapability("is_verified", "Verified", used_in_matching=False, public=False),
    FieldCapability("rejection_reason", "Rejection reason", used_in_matching=False, public=False),
)

_BY_NAME = {capability.name: capability for capability in DESIGNER_FIELDS}


def get_capability(name: str) -> FieldCapability:
    """Look up a field; unknown names raise KeyError."""
    return _BY_NAME[name]


def matching_fields() -> list[FieldCapability]:
    return [c for c in DESIGNER_FIELDS if c.used_in_matching]


def public_fields() -> list[FieldCapability]:
    return [c for c in DESIGNER_FIELDS if c.public]


def matching_view(values: Mapping[str, Any]) -> dict[str, Any]:
    """Project a designer's raw values onto the fields usable in matching.

    Fields that are absent or empty are skipped so the prompt carries no
    placeholder noise.
    """
    return {
        c.name: values[c.name]
        for c in matching_fields()
        if values.get(c.name) not in (None, "", [], {})
    }


def public_view(values: Mapping[str, Any]) -> dict[str, Any]:
    """Project a designer's raw values onto the client-facing fields."""
    return {c.name: values.get(c.name) for c in public_fields()}
