"""
OpenAI-compatible Provider - Concrete implementation of LLMProviderPort.

Works against any endpoint speaking the OpenAI chat-completions protocol.
DeepSeek is the default (base URL https://api.deepseek.com, model
deepseek-chat); pointing AI_BASE_URL at OpenAI switches providers.
"""

import json
import re
import time
from typing import Optional

from openai import (
    AsyncOpenAI,
    APIError,
    APIConnectionError,
    APITimeoutError,
    AuthenticationError,
    RateLimitError,
)

from domain.ai.ports import (
    LLMProviderPort,
    LLMCompletion,
    LLMMessage,
    LLMTimeoutError,
    LLMRateLimitError,
    LLMAuthError,
    LLMServiceError,
    LLMInvalidResponseError,
)
from observability.logging_config import get_logger
from observability.metrics import ai_calls_total, ai_latency_ms

logger = get_logger(__name__)

# Models sometimes wrap the object in prose or a markdown fence
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def extract_json_object(content: str) -> Optional[dict]:
    """Return the outermost JSON object embedded in ``content``, or None."""
    match = _JSON_OBJECT_RE.search(content or "")
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


class OpenAIProvider(LLMProviderPort):
    """
    OpenAI-compatible implementation of LLMProviderPort.

    Uses the async OpenAI Python SDK. Transient failures (connection errors,
    429, 5xx) are retried by the SDK up to ``max_retries`` times before an
    error is mapped onto the LLMError hierarchy.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: str = "deepseek-chat",
        provider_name: str = "deepseek",
        timeout: float = 25.0,
        max_retries: int = 2,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: Provider API key, taken from settings by the caller
            base_url: Endpoint base URL (None uses the SDK default)
            model: Chat model name
            provider_name: Label used in logs, metrics and MatchResult.provider
            timeout: Per-request timeout in seconds
            max_retries: SDK-level retries for transient failures
            client: Pre-built client, mainly for tests

        Raises:
            ValueError: If no API key is available and no client is given
        """
        self.name = provider_name
        self.model = model

        if client is not None:
            self.client = client
            return

        self.api_key = api_key
        if not self.api_key:
            raise ValueError("AI API key not provided. Set AI_API_KEY or DEEPSEEK_API_KEY.")

        self.client = AsyncOpenAI(
            api_key=self.api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
        )

    async def complete_json(
        self,
        messages: list[LLMMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> LLMCompletion:
        """
        Run one chat completion and extract a JSON object from the answer.

        Args:
            messages: Chat messages
            temperature: Sampling temperature
            max_tokens: Upper bound on generated tokens

        Returns:
            LLMCompletion (parsed_json is None when no object could be parsed)

        Raises:
            LLMTimeoutError, LLMRateLimitError, LLMAuthError, LLMServiceError,
            LLMInvalidResponseError
        """
        start_time = time.perf_counter()
        warnings = []

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": m.role, "content": m.content} for m in messages],
                response_format={"type": "json_object"},
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APITimeoutError as e:
            self._record("timeout", start_time)
            raise LLMTimeoutError(f"{self.name} API timeout: {str(e)}") from e
        except RateLimitError as e:
            self._record("rate_limited", start_time)
            raise LLMRateLimitError(f"{self.name} rate limit exceeded: {str(e)}") from e
        except AuthenticationError as e:
            self._record("auth_error", start_time)
            raise LLMAuthError(f"{self.name} authentication failed: {str(e)}") from e
        except (APIConnectionError, APIError) as e:
            self._record("error", start_time)
            raise LLMServiceError(f"{self.name} service error: {str(e)}") from e

        latency_ms = self._record("success", start_time)

        if not response.choices or not response.choices[0].message.content:
            raise LLMInvalidResponseError(f"{self.name} returned no content")

        raw_output = response.choices[0].message.content
        parsed_json = extract_json_object(raw_output)
        if parsed_json is None:
            warnings.append("No JSON object found in model output")

        usage = response.usage
        return LLMCompletion(
            raw_output=raw_output,
            parsed_json=parsed_json,
            provider=self.name,
            model=self.model,
            tokens_in=usage.prompt_tokens if usage else None,
            tokens_out=usage.completion_tokens if usage else None,
            latency_ms=latency_ms,
            warnings=warnings,
        )

    def _record(self, status: str, start_time: float) -> int:
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        ai_calls_total.labels(provider=self.name, status=status).inc()
        ai_latency_ms.labels(provider=self.name).observe(latency_ms)
        if status != "success":
            logger.warning(
                f"AI call failed: {status}",
                extra={"provider": self.name, "latency_ms": latency_ms},
            )
        return latency_ms
