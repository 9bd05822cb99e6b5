"""Pure matching domain: value objects, rules, state machines and errors"""

from .errors import (
    MatchingError,
    BriefNotFoundError,
    InvalidBriefError,
    AllProvidersFailedError,
    PersistenceError,
    MatchNotFoundError,
    InvalidStatusTransitionError,
    FeedbackAlreadyRecordedError,
)
from .filters import exclude, filter_feasible, is_feasible
from .models import BriefProfile, DesignerProfile, MatchResult, ScoredCandidate
from .phases import MatchPhase, PhaseTracker, PHASE_CONFIDENCE
from .ports import ScoringProviderPort, ScoringProviderError
from .ranking import rank
from .status import MatchStatus, RunState, RunStateMachine

__all__ = [
    "MatchingError",
    "BriefNotFoundError",
    "InvalidBriefError",
    "AllProvidersFailedError",
    "PersistenceError",
    "MatchNotFoundError",
    "InvalidStatusTransitionError",
    "FeedbackAlreadyRecordedError",
    "exclude",
    "filter_feasible",
    "is_feasible",
    "BriefProfile",
    "DesignerProfile",
    "MatchResult",
    "ScoredCandidate",
    "MatchPhase",
    "PhaseTracker",
    "PHASE_CONFIDENCE",
    "ScoringProviderPort",
    "ScoringProviderError",
    "rank",
    "MatchStatus",
    "RunState",
    "RunStateMachine",
]
