"""Scoring providers for designer/brief pairs.

Composition:
    AIProviderWithFallback(LLMScoringProvider(OpenAIProvider), FallbackScoringProvider)
"""

from .composite import AIProviderWithFallback
from .fallback_provider import FallbackScoringProvider
from .llm_provider import LLMScoringProvider

__all__ = [
    "AIProviderWithFallback",
    "FallbackScoringProvider",
    "LLMScoringProvider",
]
