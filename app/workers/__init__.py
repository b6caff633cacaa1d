"""
Workers module: the queue drainer and the outbound webhook client.
"""

from .drainer import QueueDrainer
from .webhook import WebhookClient

__all__ = ["QueueDrainer", "WebhookClient"]
