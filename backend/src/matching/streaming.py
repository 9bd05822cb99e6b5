"""Server-sent event encoding for progressive match results."""

import json
from typing import Any

SSE_MEDIA_TYPE = "text/event-stream"

# Disable proxy buffering so each phase reaches the client as soon as it is written
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_sse(event: str, data: Any) -> str:
    """Encode one server-sent event.

    Args:
        event: Event name (``match`` or ``error``)
        data: JSON-serializable payload

    Returns:
        str: ``event:`` and ``data:`` lines terminated by a blank line
    """
    payload = json.dumps(data, default=str, separators=(",", ":"))
    return f"event: {event}\ndata: {payload}\n\n"
