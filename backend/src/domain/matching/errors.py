"""Matching error taxonomy.

Each error carries a machine-readable ``code`` and the HTTP status the API
layer answers with. Empty candidate sets, duplicate matches and single
provider failures are absorbed by the orchestrator and never raised here.
"""


class MatchingError(Exception):
    """Base class for errors that end a matching run."""

    code = "matching_error"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BriefNotFoundError(MatchingError):
    """Brief id does not exist."""
    code = "brief_not_found"
    http_status = 404


class InvalidBriefError(MatchingError):
    """Brief lacks category, budget or timeline, or uses an unknown value."""
    code = "invalid_brief"
    http_status = 400


class AllProvidersFailedError(MatchingError):
    """Both the AI provider and the rule-based fallback failed."""
    code = "all_providers_failed"
    http_status = 503


class PersistenceError(MatchingError):
    """Writing the match failed for a reason other than a duplicate key."""
    code = "persistence_failed"
    http_status = 500


class MatchNotFoundError(MatchingError):
    """Match id does not exist."""
    code = "match_not_found"
    http_status = 404


class InvalidStatusTransitionError(MatchingError):
    """Requested match status change is not allowed."""
    code = "invalid_status_transition"
    http_status = 409


class FeedbackAlreadyRecordedError(MatchingError):
    """Feedback for this match was already submitted."""
    code = "feedback_already_recorded"
    http_status = 409
