"""State machines for persisted matches and for a single matching run.

Match status flow:
    PENDING -> UNLOCKED -> ACCEPTED

Run state flow:
    COLLECTING_CANDIDATES -> FILTERING -> SCORING -> RANKING -> PERSISTING
    -> STREAMING_COMPLETE, with ERROR reachable from every non-terminal state.
    COLLECTING_CANDIDATES finishes directly when an existing match is reused,
    FILTERING when no candidate survives.
"""

from enum import Enum
from typing import List


class MatchStatus(str, Enum):
    """Lifecycle of a persisted match."""
    PENDING = "pending"
    UNLOCKED = "unlocked"
    ACCEPTED = "accepted"


MATCH_TRANSITIONS = {
    MatchStatus.PENDING: [MatchStatus.UNLOCKED],
    MatchStatus.UNLOCKED: [MatchStatus.ACCEPTED],
    MatchStatus.ACCEPTED: [],  # Terminal state
}


class RunState(str, Enum):
    """Progress of one matching run."""
    COLLECTING_CANDIDATES = "collecting_candidates"
    FILTERING = "filtering"
    SCORING = "scoring"
    RANKING = "ranking"
    PERSISTING = "persisting"
    STREAMING_COMPLETE = "streaming_complete"
    ERROR = "error"


RUN_TRANSITIONS = {
    RunState.COLLECTING_CANDIDATES: [RunState.FILTERING, RunState.STREAMING_COMPLETE, RunState.ERROR],
    RunState.FILTERING: [RunState.SCORING, RunState.STREAMING_COMPLETE, RunState.ERROR],
    RunState.SCORING: [RunState.RANKING, RunState.ERROR],
    RunState.RANKING: [RunState.PERSISTING, RunState.ERROR],
    RunState.PERSISTING: [RunState.STREAMING_COMPLETE, RunState.ERROR],
    RunState.STREAMING_COMPLETE: [],  # Terminal state
    RunState.ERROR: [],  # Terminal state
}


class StateTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""
    pass


def validate_transition(current_status: MatchStatus, new_status: MatchStatus) -> None:
    """Validate that a match status transition is allowed.

    Args:
        current_status: Current match status
        new_status: Target status

    Raises:
        StateTransitionError: If transition is not allowed
    """
    allowed = MATCH_TRANSITIONS.get(current_status, [])
    if new_status not in allowed:
        raise StateTransitionError(
            f"Invalid transition: {current_status.value} -> {new_status.value}. "
            f"Allowed transitions from {current_status.value}: "
            f"{[s.value for s in allowed]}"
        )


class RunStateMachine:
    """Tracks the state of one matching run and rejects illegal moves."""

    def __init__(self):
        self.state = RunState.COLLECTING_CANDIDATES
        self.history: List[RunState] = [self.state]

    def advance(self, new_state: RunState) -> None:
        """Move to ``new_state``.

        Raises:
            StateTransitionError: If the move is not allowed from the current state
        """
        allowed = RUN_TRANSITIONS.get(self.state, [])
        if new_state not in allowed:
            raise StateTransitionError(
                f"Invalid run transition: {self.state.value} -> {new_state.value}"
            )
        self.state = new_state
        self.history.append(new_state)

    def fail(self) -> None:
        """Enter the error state unless the run already terminated."""
        if not self.is_terminal:
            self.advance(RunState.ERROR)

    @property
    def is_terminal(self) -> bool:
        return not RUN_TRANSITIONS.get(self.state)
