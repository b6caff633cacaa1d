"""
Forwarding Queue - in-memory FIFO of requests waiting to be relayed.

Each entry pairs the opaque JSON payload with an asyncio future that the
drainer resolves with the webhook outcome (or fails with the transport
error). The HTTP handler that created the entry awaits that future.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from ..core.utils import generate_entry_id

# Configure logging
logger = logging.getLogger(__name__)


class QueueEmpty(Exception):
    """Raised by ForwardingQueue.dequeue() when there is nothing queued."""


@dataclass
class QueueEntry:
    """
    One queued payload and its completion handle.

    Attributes:
        payload: The inbound JSON body, forwarded unchanged
        future: Resolved with a WebhookResult or failed with the error
        entry_id: Identifier used to correlate log lines
    """
    payload: Any
    future: asyncio.Future
    entry_id: str = field(default_factory=generate_entry_id)

    def resolve(self, outcome: Any) -> None:
        """Deliver the outcome to whoever is waiting on this entry."""
        if not self.future.done():
            self.future.set_result(outcome)

    def fail(self, error: BaseException) -> None:
        """Deliver a failure to whoever is waiting on this entry."""
        if not self.future.done():
            self.future.set_exception(error)


class ForwardingQueue:
    """
    Unbounded FIFO of QueueEntry objects.

    Delivery order is insertion order. There is no capacity limit and
    no backpressure; callers that care about growth must limit intake
    themselves.
    """

    def __init__(self):
        self._entries: deque[QueueEntry] = deque()

    def enqueue(self, entry: QueueEntry) -> None:
        """Append an entry to the tail of the queue."""
        self._entries.append(entry)
        logger.debug(f"Enqueued {entry.entry_id} (queue length {len(self._entries)})")

    def dequeue(self) -> QueueEntry:
        """
        Remove and return the oldest entry.

        Raises:
            QueueEmpty: if the queue has no entries
        """
        try:
            return self._entries.popleft()
        except IndexError:
            raise QueueEmpty() from None

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
