"""
LLM Provider Port - Abstract interface for text-generation providers.

Hexagonal Architecture: this is a domain port that infrastructure adapters
implement. The scoring provider depends on this port, not on a concrete SDK,
so DeepSeek, OpenAI or a test double can be plugged in.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class LLMMessage:
    """
    Message format for chat completions.

    Attributes:
        role: Message role ('system', 'user', 'assistant')
        content: Text content
    """
    role: str
    content: str


@dataclass
class LLMCompletion:
    """
    Result of one chat completion call.

    Attributes:
        raw_output: Raw string content returned by the model
        parsed_json: JSON object found in the content, None if none could be parsed
        provider: Provider name (e.g., 'deepseek', 'openai')
        model: Model name (e.g., 'deepseek-chat')
        tokens_in: Prompt tokens (None if provider doesn't report)
        tokens_out: Completion tokens (None if provider doesn't report)
        latency_ms: Latency in milliseconds
        warnings: Non-critical warnings collected while parsing
    """
    raw_output: str
    parsed_json: Optional[dict]
    provider: str
    model: str
    tokens_in: Optional[int] = None
    tokens_out: Optional[int] = None
    latency_ms: int = 0
    warnings: list[str] = field(default_factory=list)


class LLMProviderPort(ABC):
    """
    Abstract interface for chat-completion providers.

    Implementations must handle:
    - API authentication
    - Request formatting for the provider
    - Extracting a JSON object from the response
    - Mapping SDK errors onto the LLMError hierarchy
    """

    name: str = "llm"

    @abstractmethod
    async def complete_json(
        self,
        messages: list[LLMMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> LLMCompletion:
        """
        Run a chat completion that is expected to answer with a JSON object.

        Args:
            messages: Conversation, usually one system and one user message
            temperature: Sampling temperature
            max_tokens: Upper bound on generated tokens

        Returns:
            LLMCompletion with raw output and parsed JSON (None if unparseable)

        Raises:
            LLMTimeoutError: Request timed out
            LLMRateLimitError: Rate limit exceeded
            LLMAuthError: Authentication failed
            LLMServiceError: Provider unavailable or returned an error status
            LLMInvalidResponseError: Response carried no content
        """
        pass


class LLMError(Exception):
    """Base exception for LLM operations"""
    pass


class LLMTimeoutError(LLMError):
    """LLM request timed out"""
    pass


class LLMRateLimitError(LLMError):
    """Rate limit exceeded"""
    pass


class LLMAuthError(LLMError):
    """Authentication failed"""
    pass


class LLMServiceError(LLMError):
    """Provider service unavailable or returned error"""
    pass


class LLMInvalidResponseError(LLMError):
    """Provider returned invalid/unexpected response"""
    pass
