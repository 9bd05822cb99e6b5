"""Prometheus metrics for the matching backend.

Defines operational metrics for monitoring match runs and provider health.
"""

from prometheus_client import Counter, Histogram

# Match run metrics
match_runs_total = Counter(
    "onedesigner_match_runs_total",
    "Total matching runs",
    ["mode", "outcome"]  # mode: single|stream|find_new, outcome: matched|reused|no_candidates|error
)

match_run_duration_seconds = Histogram(
    "onedesigner_match_run_duration_seconds",
    "Wall-clock duration of a matching run in seconds",
    ["mode"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0]
)

match_candidates = Histogram(
    "onedesigner_match_candidates",
    "Candidates left after each pipeline stage",
    ["stage"],  # stage: collected|after_exclusion|feasible|shortlisted
    buckets=[0, 1, 2, 5, 10, 20, 50, 100, 250]
)

match_phases_emitted_total = Counter(
    "onedesigner_match_phases_emitted_total",
    "Progressive phases emitted to streaming callers",
    ["phase"]  # phase: instant|refined|final
)

# Scoring metrics
scoring_calls_total = Counter(
    "onedesigner_scoring_calls_total",
    "Candidate scoring attempts",
    ["provider", "status"]  # status: success|error
)

scoring_fallbacks_total = Counter(
    "onedesigner_scoring_fallbacks_total",
    "Times the rule-based scorer replaced the AI result",
    ["reason"]  # reason: error|timeout|empty|low_score|no_primary
)

match_score_histogram = Histogram(
    "onedesigner_match_score",
    "Distribution of primary match scores",
    ["provider"],
    buckets=[0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100]
)

# AI call metrics
ai_calls_total = Counter(
    "onedesigner_ai_calls_total",
    "Total AI API calls",
    ["provider", "status"]  # status: success|timeout|rate_limited|auth_error|error
)

ai_latency_ms = Histogram(
    "onedesigner_ai_latency_ms",
    "AI API call latency in milliseconds",
    ["provider"],
    buckets=[50, 100, 250, 500, 1000, 2500, 5000, 10000, 30000]
)

# HTTP metrics
http_request_duration_seconds = Histogram(
    "onedesigner_http_request_duration_seconds",
    "HTTP request duration by route template",
    ["method", "route", "status_code"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)

# Feedback metrics
match_feedback_total = Counter(
    "onedesigner_match_feedback_total",
    "Client feedback recorded on matches",
    ["accepted", "completed"]  # "true"|"false"
)
