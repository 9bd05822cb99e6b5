"""Unit tests for the designer field capability table and prompt building."""

from uuid import uuid4

import pytest

from domain.matching.field_capabilities import (
    DESIGNER_FIELDS,
    get_capability,
    matching_fields,
    matching_view,
    public_view,
)
from domain.matching.models import BriefProfile, DesignerProfile
from matching.scoring.prompts import build_messages, build_scoring_prompt

DESIGNER_VALUES = {
    "first_name": "Maya",
    "last_name": "Lindqvist",
    "email": "maya@example.com",
    "title": "Brand Identity Designer",
    "bio": "Calm, minimal identities.",
    "city": "Stockholm",
    "country": "Sweden",
    "style_keywords": ["minimal", "modern"],
    "industries": ["fintech"],
    "availability": "available",
    "years_experience": 8,
    "rating": 4.9,
    "is_approved": True,
    "is_verified": True,
    "rejection_reason": "Portfolio link broken",
    "portfolio_url": "https://example.com/maya",
}


class TestFieldCapabilityTable:
    """One table decides which fields reach prompts and exports"""

    def test_field_names_are_unique(self):
        names = [c.name for c in DESIGNER_FIELDS]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("name", [
        "email", "first_name", "last_name", "is_approved", "is_verified",
        "rejection_reason", "portfolio_url", "avatar_url",
    ])
    def test_private_fields_never_used_in_matching(self, name):
        assert get_capability(name).used_in_matching is False

    @pytest.mark.parametrize("name", ["title", "bio", "country", "availability"])
    def test_profile_fields_used_in_matching(self, name):
        assert get_capability(name).used_in_matching is True

    def test_unknown_field_raises(self):
        with pytest.raises(KeyError):
            get_capability("password_hash")

    def test_matching_view_contains_only_allowed_fields(self):
        view = matching_view(DESIGNER_VALUES)
        allowed = {c.name for c in matching_fields()}
        assert set(view) <= allowed
        assert "email" not in view
        assert "rejection_reason" not in view
        assert view["title"] == "Brand Identity Designer"

    def test_matching_view_skips_empty_values(self):
        view = matching_view({"title": "", "bio": None, "industries": [], "city": "Oslo"})
        assert view == {"city": "Oslo"}

    def test_public_view_hides_contact_and_admin_fields(self):
        view = public_view(DESIGNER_VALUES)
        assert view["first_name"] == "Maya"
        for hidden in ("email", "last_name", "rejection_reason", "is_approved", "portfolio_url"):
            assert hidden not in view


class TestScoringPrompt:
    """Prompts embed only allow-listed designer fields"""

    def _designer(self) -> DesignerProfile:
        return DesignerProfile(id=uuid4(), availability="available", fields=dict(DESIGNER_VALUES))

    def _brief(self) -> BriefProfile:
        return BriefProfile(
            id=uuid4(),
            client_id=uuid4(),
            design_category="brand-identity",
            budget_range="mid",
            timeline_type="standard",
            industry="fintech",
            styles=("minimal",),
        )

    def test_prompt_excludes_private_values(self):
        prompt = build_scoring_prompt(self._designer(), self._brief())
        assert "maya@example.com" not in prompt
        assert "Lindqvist" not in prompt
        assert "Portfolio link broken" not in prompt
        assert "example.com/maya" not in prompt

    def test_prompt_includes_profile_and_brief(self):
        prompt = build_scoring_prompt(self._designer(), self._brief())
        assert "Brand Identity Designer" in prompt
        assert "Stockholm" in prompt
        assert "brand-identity" in prompt
        assert "minimal" in prompt

    def test_messages_are_system_then_user(self):
        messages = build_messages(self._designer(), self._brief())
        assert [m.role for m in messages] == ["system", "user"]
        assert "JSON" in messages[0].content
