"""Unit tests for match feedback and designer metric updates."""

from uuid import uuid4

import pytest

from domain.matching.errors import FeedbackAlreadyRecordedError, MatchNotFoundError
from feedback.models import MatchFeedback
from feedback.services import DesignerMetrics, FeedbackService, apply_project_outcome
from models.designer import Designer


class TestApplyProjectOutcome:
    """Running averages over completed projects"""

    def test_rating_is_running_mean(self):
        updated = apply_project_outcome(
            DesignerMetrics(rating=4.0, on_time_delivery_rate=None, total_projects=3),
            satisfaction=5,
            delivered_on_time=None,
        )
        assert updated.rating == 4.25
        assert updated.total_projects == 4
        assert updated.on_time_delivery_rate is None

    def test_on_time_rate_is_percentage(self):
        updated = apply_project_outcome(
            DesignerMetrics(rating=4.5, on_time_delivery_rate=90.0, total_projects=9),
            satisfaction=None,
            delivered_on_time=False,
        )
        assert updated.on_time_delivery_rate == 81.0
        assert updated.rating == 4.5

    def test_first_project_sets_metrics(self):
        updated = apply_project_outcome(
            DesignerMetrics(rating=0.0, on_time_delivery_rate=None, total_projects=0),
            satisfaction=3,
            delivered_on_time=True,
        )
        assert updated == DesignerMetrics(rating=3.0, on_time_delivery_rate=100.0, total_projects=1)

    def test_unrated_designer_takes_first_satisfaction(self):
        updated = apply_project_outcome(
            DesignerMetrics(rating=0.0, on_time_delivery_rate=None, total_projects=12),
            satisfaction=4,
            delivered_on_time=None,
        )
        assert updated.rating == 4.0
        assert updated.total_projects == 13


class TestRecordFeedback:
    """Feedback is stored once per match and feeds designer metrics"""

    def test_accepted_without_completion_leaves_designer_unchanged(self, db_session, make_match):
        match = make_match()

        feedback, designer = FeedbackService.record_feedback(db_session, match.id, accepted=True)

        assert feedback.match_id == match.id
        assert feedback.designer_id == match.designer_id
        assert feedback.client_id == match.client_id
        assert feedback.accepted is True
        assert feedback.project_completed is False
        assert designer.rating == 4.7
        assert designer.total_projects == 20
        assert designer.on_time_delivery_rate is None

    def test_completed_project_updates_designer(self, db_session, make_designer, make_match):
        designer = make_designer(rating=4.7, total_projects=20, on_time_delivery_rate=95.0)
        match = make_match(designer=designer)

        feedback, updated = FeedbackService.record_feedback(
            db_session,
            match.id,
            accepted=True,
            project_completed=True,
            satisfaction=5,
            delivered_on_time=True,
            comment="Great collaboration",
        )

        assert feedback.project_started is True
        assert feedback.comment == "Great collaboration"
        assert updated.total_projects == 21
        assert updated.rating == 4.71
        assert updated.on_time_delivery_rate == 95.2
        stored = db_session.get(Designer, designer.id)
        assert stored.total_projects == 21

    def test_second_submission_rejected(self, db_session, make_match):
        match = make_match()
        FeedbackService.record_feedback(db_session, match.id, accepted=False)

        with pytest.raises(FeedbackAlreadyRecordedError):
            FeedbackService.record_feedback(db_session, match.id, accepted=True)

        assert db_session.query(MatchFeedback).count() == 1

    def test_unknown_match(self, db_session):
        with pytest.raises(MatchNotFoundError):
            FeedbackService.record_feedback(db_session, uuid4(), accepted=True)


class TestSummarize:

    def test_empty(self, db_session):
        summary = FeedbackService.summarize(db_session)
        assert summary["total"] == 0
        assert summary["acceptance_rate"] is None
        assert summary["average_satisfaction"] is None
        assert summary["on_time_rate"] is None

    def test_aggregates_all_feedback(self, db_session, make_match):
        FeedbackService.record_feedback(
            db_session, make_match().id,
            accepted=True, project_completed=True, satisfaction=5, delivered_on_time=True,
        )
        FeedbackService.record_feedback(
            db_session, make_match().id,
            accepted=True, project_completed=True, satisfaction=3, delivered_on_time=False,
        )
        FeedbackService.record_feedback(db_session, make_match().id, accepted=False)
        FeedbackService.record_feedback(db_session, make_match().id, accepted=False)

        summary = FeedbackService.summarize(db_session)

        assert summary["total"] == 4
        assert summary["accepted"] == 2
        assert summary["completed"] == 2
        assert summary["acceptance_rate"] == 50.0
        assert summary["average_satisfaction"] == 4.0
        assert summary["on_time_rate"] == 50.0
