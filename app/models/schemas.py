"""
Pydantic models for the relay's responses.

Inbound payloads are opaque JSON and are not modelled; only what the
relay itself produces has a schema.
"""

from pydantic import BaseModel, Field
from typing import Any, Optional
from enum import Enum


class DrainerState(str, Enum):
    """
    States of the queue drainer.

    idle → sending → (scheduled → sending)* → idle
    """
    IDLE = "idle"
    SCHEDULED = "scheduled"
    SENDING = "sending"


# ============================================================
# Delivery Outcome
# ============================================================

class WebhookResult(BaseModel):
    """
    Outcome of one forwarded request.

    Produced once per entry whose webhook call returned a response,
    whatever its status code.
    """
    status_code: int = Field(
        ...,
        alias="statusCode",
        description="HTTP status returned by the webhook"
    )
    success: bool = Field(
        ...,
        description="True when the status code is in the 2xx range"
    )
    delivered_at: str = Field(
        ...,
        alias="deliveredAt",
        description="ISO timestamp when the response was received"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "statusCode": 200,
                "success": True,
                "deliveredAt": "2026-01-01T12:00:00+00:00"
            }
        }


# ============================================================
# Response Models
# ============================================================

class RelaySuccessResponse(BaseModel):
    """Returned once the webhook answered the caller's request."""
    message: str = "Request processed successfully"
    webhook_result: WebhookResult = Field(..., alias="webhookResult")

    class Config:
        populate_by_name = True


class RelayErrorResponse(BaseModel):
    """Returned when the webhook call failed at the transport level."""
    message: str = "Error processing request"
    error: str = Field(
        ...,
        description="Description of the transport failure"
    )


class QueueStatsResponse(BaseModel):
    """Snapshot of the forwarding queue and drainer."""
    queue_length: int
    drainer_state: DrainerState
    forwarded: int
    failed: int
    throttle_ms: int
    last_sent_at: Optional[str] = Field(
        default=None,
        description="ISO timestamp of the most recent send, if any"
    )
    estimated_wait_seconds: float
    timestamp: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    service: str = "throttled-webhook-relay"
    version: str
    drainer_state: DrainerState
    timestamp: str


class ErrorResponse(BaseModel):
    """Generic error response."""
    error: str
    detail: Optional[Any] = None
    timestamp: str
