"""
Queue module: the forwarding queue and the rate gate.
"""

from .forwarding import ForwardingQueue, QueueEntry, QueueEmpty
from .gate import GateDecision, can_send_now

__all__ = ["ForwardingQueue", "QueueEntry", "QueueEmpty", "GateDecision", "can_send_now"]
