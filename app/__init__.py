"""
Throttled Webhook Relay

Queues inbound JSON requests and forwards them one at a time to a
fixed webhook endpoint, no more often than once per throttle interval.
"""

__version__ = "1.0.0"
