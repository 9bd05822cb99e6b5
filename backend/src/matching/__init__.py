"""Designer matching: repositories, scoring providers, orchestrator and API.

Pipeline:
- Candidate collection (approved, verified, available or busy, category match)
- Exclusion of designers already matched to the client
- Feasibility filtering on budget, timeline and availability
- Concurrent AI scoring with a rule-based fallback
- Ranking, persistence of the top match, progressive delivery
"""

from .orchestrator import MatchOrchestrator, MatchOutcome, PhaseEvent
from .repository import BriefRepository, DesignerRepository, MatchRepository
from .router import router as matching_router

__all__ = [
    "MatchOrchestrator",
    "MatchOutcome",
    "PhaseEvent",
    "BriefRepository",
    "DesignerRepository",
    "MatchRepository",
    "matching_router",
]
