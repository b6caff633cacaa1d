"""
Webhook Client - performs the outbound POST for one queued payload.

The client opens a short-lived httpx.AsyncClient per call. No timeout is
applied: a webhook that never answers holds up the whole queue, which is
a known limitation of the relay.
"""

import httpx
import logging
from typing import Any, Optional

from ..core.exceptions import WebhookTransportError

# Configure logging
logger = logging.getLogger(__name__)


class WebhookClient:
    """
    Sends JSON payloads to a single fixed webhook URL.

    Returns the HTTP status code of every response, successful or not.
    Only transport-level failures raise.
    """

    def __init__(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            url: Webhook endpoint
            headers: Extra request headers
            transport: Optional httpx transport (used by tests)
        """
        self.url = url
        self.headers = headers or {"Content-Type": "application/json"}
        self._transport = transport

    async def forward(self, payload: Any) -> int:
        """
        POST the payload as JSON to the webhook.

        Args:
            payload: Any JSON-serializable value

        Returns:
            The response status code

        Raises:
            WebhookTransportError: if no response was received
        """
        try:
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    headers=self.headers,
                    json=payload
                )
                return response.status_code

        except httpx.HTTPError as e:
            description = str(e) or e.__class__.__name__
            logger.debug(f"Transport error posting to {self.url}: {description}")
            raise WebhookTransportError(self.url, description) from e
