"""FastAPI dependencies for the matching endpoints.

Tests replace these through ``app.dependency_overrides`` to run without
network access or a real database.
"""

from contextlib import AbstractContextManager
from functools import lru_cache
from typing import Callable

from sqlalchemy.orm import Session

from config import get_settings
from database import get_db_session
from domain.matching.ports import ScoringProviderPort
from infrastructure.ai.openai_provider import OpenAIProvider
from observability.logging_config import get_logger
from .scoring import AIProviderWithFallback, FallbackScoringProvider, LLMScoringProvider

logger = get_logger(__name__)


@lru_cache()
def get_scoring_provider() -> ScoringProviderPort:
    """Build the composed scoring provider once per process.

    Without an API key only the rule-based scorer runs.
    """
    settings = get_settings()
    fallback = FallbackScoringProvider(jitter=settings.FALLBACK_JITTER)

    primary = None
    if settings.AI_API_KEY:
        llm = OpenAIProvider(
            api_key=settings.AI_API_KEY,
            base_url=settings.AI_BASE_URL,
            model=settings.AI_MODEL,
            provider_name=settings.AI_PROVIDER,
            timeout=settings.AI_TIMEOUT_SECONDS,
            max_retries=settings.AI_MAX_RETRIES,
        )
        primary = LLMScoringProvider(
            llm,
            temperature=settings.AI_TEMPERATURE,
            max_tokens=settings.AI_MAX_TOKENS,
        )
    else:
        logger.warning("AI_API_KEY not set, matching will use rule-based scoring only")

    return AIProviderWithFallback(
        primary=primary,
        fallback=fallback,
        timeout_seconds=settings.AI_TIMEOUT_SECONDS,
        min_valid_score=settings.MATCH_MIN_VALID_SCORE,
    )


def get_session_scope() -> Callable[[], AbstractContextManager[Session]]:
    """Session factory for streaming responses.

    A streamed body is produced after the endpoint returns, so the stream
    opens and closes its own session instead of using ``get_db``.
    """
    return get_db_session
