"""
Models module containing Pydantic schemas.
"""

from .schemas import (
    DrainerState,
    WebhookResult,
    RelaySuccessResponse,
    RelayErrorResponse,
    QueueStatsResponse,
    HealthResponse,
    ErrorResponse
)

__all__ = [
    "DrainerState",
    "WebhookResult",
    "RelaySuccessResponse",
    "RelayErrorResponse",
    "QueueStatsResponse",
    "HealthResponse",
    "ErrorResponse"
]
