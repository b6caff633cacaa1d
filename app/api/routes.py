"""
API Routes - FastAPI endpoints for relaying requests to the webhook.

- POST /: Queues the JSON body and waits until the webhook has answered
- GET /queue/stats: Queue length and drainer counters
- GET /health: Liveness check

POST / is synchronous from the caller's point of view: the response is
only sent once the drainer has forwarded this particular payload, which
may take a multiple of the throttle interval when the queue is long.
"""

import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from ..core.utils import get_timestamp
from ..models.schemas import (
    RelaySuccessResponse,
    RelayErrorResponse,
    ErrorResponse,
    QueueStatsResponse,
    HealthResponse
)
from ..workers.drainer import QueueDrainer

# Configure logging
logger = logging.getLogger(__name__)

# Create the router
router = APIRouter()


def get_drainer(request: Request) -> QueueDrainer:
    """Return the drainer created by the application lifespan."""
    return request.app.state.drainer


# ============================================================
# Relay Endpoint
# ============================================================

@router.post(
    "/",
    response_model=RelaySuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Relay a payload to the webhook",
    description="""
    Queue a JSON payload for delivery to the configured webhook.

    Payloads are forwarded one at a time, in arrival order, with at
    least the throttle interval between consecutive calls. The response
    is held until this payload has been delivered.

    A non-2xx answer from the webhook is still a 200 here, with
    `webhookResult.success` set to false. Only transport failures
    (the webhook could not be reached) produce a 500.

    Any JSON value except `null` is accepted; `null` or an empty body
    is treated as a missing body and rejected with 422.
    """,
    responses={
        200: {"description": "Webhook answered"},
        422: {"model": ErrorResponse, "description": "Body is missing or not valid JSON"},
        500: {"model": RelayErrorResponse, "description": "Webhook could not be reached"}
    }
)
async def relay_request(
    payload: Any = Body(...),
    drainer: QueueDrainer = Depends(get_drainer)
):
    """Queue the payload and return the webhook outcome."""
    try:
        result = await drainer.submit(payload)
    except Exception as e:
        logger.error(f"Error sending webhook: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=RelayErrorResponse(error=str(e) or e.__class__.__name__).model_dump()
        )

    return RelaySuccessResponse(webhook_result=result)


# ============================================================
# Utility Endpoints
# ============================================================

@router.get(
    "/queue/stats",
    response_model=QueueStatsResponse,
    summary="Get queue statistics",
    description="Get current queue length, drainer state and delivery counters."
)
async def get_queue_stats(
    drainer: QueueDrainer = Depends(get_drainer)
) -> QueueStatsResponse:
    """
    Get current queue statistics.

    Useful for clients to estimate how long a new request will wait.
    """
    return QueueStatsResponse(**drainer.stats(), timestamp=get_timestamp())


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check"
)
async def health_check(
    request: Request,
    drainer: QueueDrainer = Depends(get_drainer)
) -> HealthResponse:
    """The relay has no external dependencies to probe; report liveness."""
    return HealthResponse(
        version=request.app.version,
        drainer_state=drainer.state,
        timestamp=get_timestamp()
    )
