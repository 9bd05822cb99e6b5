"""Unit tests for progressive phase ordering."""

import pytest

from domain.matching.phases import (
    PHASE_CONFIDENCE,
    MatchPhase,
    PhaseRegressionError,
    PhaseTracker,
)


class TestPhaseTracker:
    """Phases are emitted in strictly increasing order"""

    def test_in_order_sequence(self):
        tracker = PhaseTracker()
        for phase in (MatchPhase.INSTANT, MatchPhase.REFINED, MatchPhase.FINAL):
            assert tracker.should_emit(phase)
            tracker.mark(phase)
        assert tracker.current == MatchPhase.FINAL

    def test_phases_may_be_skipped(self):
        tracker = PhaseTracker()
        tracker.mark(MatchPhase.FINAL)
        assert tracker.current == MatchPhase.FINAL

    def test_refined_after_final_is_suppressed(self):
        tracker = PhaseTracker()
        tracker.mark(MatchPhase.INSTANT)
        tracker.mark(MatchPhase.FINAL)
        assert tracker.should_emit(MatchPhase.REFINED) is False
        with pytest.raises(PhaseRegressionError):
            tracker.mark(MatchPhase.REFINED)

    def test_same_phase_twice_is_rejected(self):
        tracker = PhaseTracker()
        tracker.mark(MatchPhase.REFINED)
        assert tracker.should_emit(MatchPhase.REFINED) is False
        with pytest.raises(PhaseRegressionError):
            tracker.mark(MatchPhase.REFINED)


def test_confidence_rises_with_phase():
    assert PHASE_CONFIDENCE[MatchPhase.INSTANT] == "low"
    assert PHASE_CONFIDENCE[MatchPhase.REFINED] == "medium"
    assert PHASE_CONFIDENCE[MatchPhase.FINAL] == "high"
    assert MatchPhase.INSTANT.rank < MatchPhase.REFINED.rank < MatchPhase.FINAL.rank
