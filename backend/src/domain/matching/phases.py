"""Progressive result phases and the guard that keeps them in order."""

from enum import Enum


class MatchPhase(str, Enum):
    """Stage of a progressive result, in increasing confidence."""
    INSTANT = "instant"
    REFINED = "refined"
    FINAL = "final"

    @property
    def rank(self) -> int:
        return _PHASE_ORDER[self]


_PHASE_ORDER = {
    MatchPhase.INSTANT: 0,
    MatchPhase.REFINED: 1,
    MatchPhase.FINAL: 2,
}

# Confidence label attached to each phase
PHASE_CONFIDENCE = {
    MatchPhase.INSTANT: "low",
    MatchPhase.REFINED: "medium",
    MatchPhase.FINAL: "high",
}


class PhaseRegressionError(Exception):
    """Raised when a phase would be emitted after a higher one."""
    pass


class PhaseTracker:
    """Remembers the highest phase emitted to one caller.

    ``should_emit`` lets the producer skip phases that became redundant (for
    example ``refined`` arriving after ``final``). ``mark`` enforces the order.
    """

    def __init__(self):
        self.current = None

    def should_emit(self, phase: MatchPhase) -> bool:
        return self.current is None or phase.rank > self.current.rank

    def mark(self, phase: MatchPhase) -> None:
        """Record ``phase`` as emitted.

        Raises:
            PhaseRegressionError: If ``phase`` is not above the last emitted one
        """
        if not self.should_emit(phase):
            raise PhaseRegressionError(
                f"Phase {phase.value} cannot follow {self.current.value}"
            )
        self.current = phase
