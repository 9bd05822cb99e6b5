"""Pytest fixtures for the matching backend.

Provides reusable test fixtures for:
- In-memory SQLite database session (tables created per test)
- Factories for designers, briefs and matches
- Stub scoring providers (no network access)
- A TestClient wired to the test session and a stub scorer

Usage:
    def test_find_match(client, make_designer, make_brief):
        brief = make_brief()
        make_designer()
        response = client.post("/api/v1/match/find", json={"brief_id": str(brief.id)})
        assert response.status_code == 200
"""

import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Generator
from uuid import uuid4

# Settings are read at import time, so the environment is prepared first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AI_API_KEY"] = ""
os.environ["LOG_JSON"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from models.base import Base
from models.brief import Brief
from models.designer import Designer
from models.match import Match
from feedback.models import MatchFeedback  # noqa: F401  (registers the table)
from domain.matching.models import MatchResult
from domain.matching.ports import ScoringProviderError, ScoringProviderPort


test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class StubScorer(ScoringProviderPort):
    """Scoring provider returning preset scores per designer email.

    Designers without a preset get ``default``. A preset that is an
    exception instance is raised instead.
    """

    name = "stub"

    def __init__(self, scores=None, default=80):
        self.scores = scores or {}
        self.default = default
        self.calls = []

    async def score(self, designer, brief):
        email = designer.fields.get("email")
        self.calls.append(email)
        preset = self.scores.get(email, self.default)
        if isinstance(preset, Exception):
            raise preset
        return MatchResult(
            score=preset,
            reasons=[f"Stub reason for designer {designer.id}"],
            personalized_reasons=[f"Stub reason for designer {designer.id}"],
            confidence="high",
            provider=self.name,
        )


class FailingScorer(ScoringProviderPort):
    """Scoring provider that always fails."""

    name = "failing"

    async def score(self, designer, brief):
        raise ScoringProviderError("scoring unavailable")


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test.

    Creates all tables before the test and drops them after.
    """
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client_id():
    return uuid4()


@pytest.fixture
def make_designer(db_session: Session):
    """Factory creating an approved, verified, available brand designer.

    Keyword arguments override any column.
    """
    counter = {"n": 0}

    def _make(**overrides) -> Designer:
        counter["n"] += 1
        n = counter["n"]
        data = {
            "first_name": f"Designer{n}",
            "last_name": "Test",
            "email": f"designer{n}@example.com",
            "title": "Brand Designer",
            "bio": "Identity systems for growing companies.",
            "city": "Berlin",
            "country": "Germany",
            "primary_categories": ["brand-identity"],
            "secondary_categories": [],
            "style_keywords": ["minimal", "modern"],
            "industries": ["fintech"],
            "preferred_project_sizes": ["small", "medium"],
            "turnaround_times": {"brand-identity": 5},
            "availability": "available",
            "is_approved": True,
            "is_verified": True,
            "years_experience": 6,
            "rating": 4.7,
            "total_projects": 20,
        }
        data.update(overrides)
        designer = Designer(**data)
        db_session.add(designer)
        db_session.commit()
        db_session.refresh(designer)
        return designer

    return _make


@pytest.fixture
def make_brief(db_session: Session, client_id):
    """Factory creating an entry-budget urgent brand-identity brief."""

    def _make(**overrides) -> Brief:
        data = {
            "client_id": client_id,
            "company_name": "Acme Pay",
            "design_category": "brand-identity",
            "industry": "fintech",
            "budget_range": "entry",
            "timeline_type": "urgent",
            "description": "Logo and identity for a payments startup.",
            "styles": ["minimal"],
        }
        data.update(overrides)
        brief = Brief(**data)
        db_session.add(brief)
        db_session.commit()
        db_session.refresh(brief)
        return brief

    return _make


@pytest.fixture
def make_match(db_session: Session, make_designer, make_brief):
    """Factory creating a pending match between a new designer and a new brief.

    Pass ``designer`` or ``brief`` to reuse existing rows.
    """

    def _make(designer=None, brief=None, **overrides) -> Match:
        designer = designer or make_designer()
        brief = brief or make_brief()
        data = {
            "brief_id": brief.id,
            "designer_id": designer.id,
            "client_id": brief.client_id,
            "score": 82,
            "reasons": ["Strong portfolio"],
            "personalized_reasons": ["Strong portfolio"],
            "confidence": "high",
            "provider": "stub",
            "status": "pending",
        }
        data.update(overrides)
        match = Match(**data)
        db_session.add(match)
        db_session.commit()
        db_session.refresh(match)
        return match

    return _make


@pytest.fixture
def stub_scorer() -> StubScorer:
    return StubScorer()


@pytest.fixture
def scorer_factory():
    """The StubScorer class, for tests that need preset scores."""
    return StubScorer


@pytest.fixture
def failing_scorer() -> FailingScorer:
    return FailingScorer()


@pytest.fixture(scope="function")
def client(db_session: Session, stub_scorer: StubScorer):
    """Create a test client using the test session and the stub scorer."""
    from main import app
    from database import get_db
    from matching.dependencies import get_scoring_provider, get_session_scope

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    @contextmanager
    def test_session_scope():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_scoring_provider] = lambda: stub_scorer
    app.dependency_overrides[get_session_scope] = lambda: test_session_scope

    yield TestClient(app)

    app.dependency_overrides.clear()
