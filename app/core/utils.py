"""
Shared utility functions for the webhook relay.

Contains helpers for ID generation, timestamps and log formatting.
"""

import json
import time
import uuid
from datetime import datetime, timezone
from typing import Any


def generate_entry_id() -> str:
    """
    Generate a unique identifier for a queued request.

    The id only correlates log lines for one request; it is never sent
    to the webhook.

    Returns:
        A unique id string in format 'req_<hex>'
    """
    return f"req_{uuid.uuid4().hex[:16]}"


def get_timestamp() -> str:
    """
    Get current UTC timestamp in ISO format.

    Returns:
        ISO-formatted UTC timestamp string
    """
    return datetime.now(timezone.utc).isoformat()


def monotonic_ms() -> float:
    """Current value of the monotonic clock in milliseconds."""
    return time.monotonic() * 1000


def safe_json_dumps(data: Any, default: str = "{}") -> str:
    """
    Safely serialize data to JSON string.

    Args:
        data: Data to serialize
        default: Value to return if serialization fails

    Returns:
        JSON string or default value on failure
    """
    try:
        return json.dumps(data, default=str)
    except (TypeError, ValueError):
        return default


def truncate_string(s: str, max_length: int = 100) -> str:
    """
    Truncate a string to a maximum length for logging.

    Args:
        s: String to truncate
        max_length: Maximum allowed length

    Returns:
        Original string if short enough, otherwise truncated with ellipsis
    """
    if len(s) <= max_length:
        return s
    return s[:max_length - 3] + "..."
