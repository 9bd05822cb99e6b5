"""AI domain layer - Port and error types for text-generation providers"""

from .ports import (
    LLMProviderPort,
    LLMCompletion,
    LLMMessage,
    LLMError,
    LLMTimeoutError,
    LLMRateLimitError,
    LLMAuthError,
    LLMServiceError,
    LLMInvalidResponseError,
)

__all__ = [
    "LLMProviderPort",
    "LLMCompletion",
    "LLMMessage",
    "LLMError",
    "LLMTimeoutError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMServiceError",
    "LLMInvalidResponseError",
]
