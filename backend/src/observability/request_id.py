"""Request ID management for request correlation.

Provides context-aware request ID generation and propagation across async
operations, including the scoring tasks spawned by a matching run.
"""

import uuid
from contextvars import ContextVar, Token
from typing import Optional

# Context variable for request_id (async-safe, copied into child tasks)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    """Generate a new unique request ID (UUID v4)."""
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Current request ID, or "no-request-id" outside a request."""
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> Token:
    """Set request ID in current context.

    Returns:
        Token: Pass to reset_request_id to restore the previous value
    """
    return request_id_var.set(request_id)


def reset_request_id(token: Token) -> None:
    request_id_var.reset(token)
