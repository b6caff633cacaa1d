"""
Core module containing configuration and utilities.
"""

from .config import settings, Settings, RelayConfig
from .exceptions import RelayError, WebhookTransportError
from .utils import generate_entry_id, get_timestamp, monotonic_ms, safe_json_dumps, truncate_string

__all__ = [
    "settings",
    "Settings",
    "RelayConfig",
    "RelayError",
    "WebhookTransportError",
    "generate_entry_id",
    "get_timestamp",
    "monotonic_ms",
    "safe_json_dumps",
    "truncate_string",
]
