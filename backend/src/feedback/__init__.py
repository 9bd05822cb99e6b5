"""Client feedback on matches

This module handles:
- Recording acceptance, satisfaction and delivery outcome per match
- Updating designer performance metrics from completed projects
- Feedback aggregation for quality monitoring
"""

from .models import MatchFeedback
from .services import DesignerMetrics, FeedbackService, apply_project_outcome

__all__ = [
    "MatchFeedback",
    "DesignerMetrics",
    "FeedbackService",
    "apply_project_outcome",
]
