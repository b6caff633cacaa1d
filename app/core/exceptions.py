"""
Exception types raised by the relay.
"""


class RelayError(Exception):
    """Base class for errors raised while relaying a request."""


class WebhookTransportError(RelayError):
    """
    The outbound call to the webhook endpoint failed.

    Raised for network failures, timeouts and protocol errors. A response
    with a non-2xx status is NOT a transport error; it is reported as a
    normal outcome with success=False.
    """

    def __init__(self, url: str, description: str):
        self.url = url
        self.description = description
        super().__init__(description)
