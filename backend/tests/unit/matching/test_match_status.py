"""Unit tests for the match status and run state machines."""

import pytest

from domain.matching.status import (
    MATCH_TRANSITIONS,
    MatchStatus,
    RunState,
    RunStateMachine,
    StateTransitionError,
    validate_transition,
)


class TestMatchStatusTransitions:
    """pending -> unlocked -> accepted, nothing else"""

    @pytest.mark.parametrize("current,new", [
        (MatchStatus.PENDING, MatchStatus.UNLOCKED),
        (MatchStatus.UNLOCKED, MatchStatus.ACCEPTED),
    ])
    def test_valid_transitions(self, current, new):
        validate_transition(current, new)
        assert new in MATCH_TRANSITIONS[current]

    @pytest.mark.parametrize("current,new", [
        (MatchStatus.PENDING, MatchStatus.ACCEPTED),
        (MatchStatus.UNLOCKED, MatchStatus.PENDING),
        (MatchStatus.ACCEPTED, MatchStatus.UNLOCKED),
        (MatchStatus.ACCEPTED, MatchStatus.PENDING),
        (MatchStatus.PENDING, MatchStatus.PENDING),
    ])
    def test_invalid_transitions(self, current, new):
        with pytest.raises(StateTransitionError) as exc_info:
            validate_transition(current, new)
        assert current.value in str(exc_info.value)

    def test_accepted_is_terminal(self):
        assert MATCH_TRANSITIONS[MatchStatus.ACCEPTED] == []
        for status in MatchStatus:
            with pytest.raises(StateTransitionError):
                validate_transition(MatchStatus.ACCEPTED, status)


class TestRunStateMachine:
    """A run only moves forward and ends in a terminal state"""

    def test_full_happy_path(self):
        run = RunStateMachine()
        for state in (RunState.FILTERING, RunState.SCORING, RunState.RANKING,
                      RunState.PERSISTING, RunState.STREAMING_COMPLETE):
            run.advance(state)
        assert run.state == RunState.STREAMING_COMPLETE
        assert run.is_terminal
        assert run.history[0] == RunState.COLLECTING_CANDIDATES
        assert len(run.history) == 6

    def test_reused_match_completes_from_collecting(self):
        run = RunStateMachine()
        run.advance(RunState.STREAMING_COMPLETE)
        assert run.is_terminal

    def test_empty_candidate_set_completes_from_filtering(self):
        run = RunStateMachine()
        run.advance(RunState.FILTERING)
        run.advance(RunState.STREAMING_COMPLETE)
        assert run.state == RunState.STREAMING_COMPLETE

    def test_skipping_a_stage_raises(self):
        run = RunStateMachine()
        with pytest.raises(StateTransitionError):
            run.advance(RunState.RANKING)
        assert run.state == RunState.COLLECTING_CANDIDATES

    def test_going_back_raises(self):
        run = RunStateMachine()
        run.advance(RunState.FILTERING)
        run.advance(RunState.SCORING)
        with pytest.raises(StateTransitionError):
            run.advance(RunState.FILTERING)

    def test_fail_from_any_running_state(self):
        run = RunStateMachine()
        run.advance(RunState.FILTERING)
        run.advance(RunState.SCORING)
        run.fail()
        assert run.state == RunState.ERROR
        assert run.is_terminal

    def test_fail_after_completion_is_a_no_op(self):
        run = RunStateMachine()
        run.advance(RunState.STREAMING_COMPLETE)
        run.fail()
        assert run.state == RunState.STREAMING_COMPLETE
