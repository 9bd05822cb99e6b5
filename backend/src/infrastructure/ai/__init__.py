"""AI Infrastructure - Adapters for chat-completion providers.

This module contains concrete implementations of the LLM domain port.
"""

from .openai_provider import OpenAIProvider

__all__ = [
    "OpenAIProvider",
]
