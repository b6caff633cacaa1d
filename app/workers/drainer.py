"""
Queue Drainer - forwards queued requests to the webhook, one at a time.

The drainer is the only component allowed to pop entries and call the
webhook. It guarantees:

1. Entries are forwarded strictly in arrival order
2. Only one webhook call is in flight at any moment
3. Consecutive calls start at least `throttle_ms` apart, measured from
   the start of the previous call

It runs as a single asyncio task that exists only while the queue has
work; enqueueing into an idle drainer starts a new task.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from ..core.utils import get_timestamp, monotonic_ms, safe_json_dumps, truncate_string
from ..models.schemas import DrainerState, WebhookResult
from ..queue.forwarding import ForwardingQueue, QueueEntry
from ..queue.gate import can_send_now

# Configure logging
logger = logging.getLogger(__name__)

SendFunc = Callable[[Any], Awaitable[int]]


class QueueDrainer:
    """
    Serializes webhook calls against a wall-clock rate limit.

    States:
    - idle: nothing queued, no task running
    - scheduled: waiting for the throttle interval to elapse
    - sending: awaiting the webhook's response for the head entry

    The clock (milliseconds) and sleep function are injectable so the
    state machine can be driven by a virtual clock in tests.
    """

    def __init__(
        self,
        queue: ForwardingQueue,
        send: SendFunc,
        throttle_ms: int,
        clock: Callable[[], float] = monotonic_ms,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """
        Args:
            queue: The queue to drain
            send: Coroutine function posting one payload, returning its status
            throttle_ms: Minimum spacing between sends in milliseconds
            clock: Returns the current time in milliseconds
            sleep: Suspends for the given number of seconds
        """
        self.queue = queue
        self.throttle_ms = throttle_ms
        self.state = DrainerState.IDLE
        self.last_sent_at: Optional[float] = None
        self.last_sent_timestamp: Optional[str] = None
        self.forwarded = 0
        self.failed = 0

        self._send = send
        self._clock = clock
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    async def submit(self, payload: Any) -> WebhookResult:
        """
        Queue a payload and wait for its webhook outcome.

        The wait is shielded: if the caller goes away, the entry keeps its
        place in the queue and is still forwarded.

        Returns:
            WebhookResult for the forwarded payload

        Raises:
            WebhookTransportError: if the webhook call failed
        """
        loop = asyncio.get_running_loop()
        entry = QueueEntry(payload=payload, future=loop.create_future())
        self.queue.enqueue(entry)
        logger.info(f"Queued request {entry.entry_id} (queue length {len(self.queue)})")
        self.kick()
        return await asyncio.shield(entry.future)

    def kick(self) -> None:
        """Start the drain loop unless it is already running."""
        if self._task is not None and not self._task.done():
            return
        if not self.queue:
            return
        self._task = asyncio.create_task(self._drain())

    async def close(self) -> None:
        """Stop the drain loop. Queued entries are abandoned, not drained."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        if self.queue:
            logger.warning(f"Drainer stopped with {len(self.queue)} queued request(s) abandoned")
        logger.info(f"Drainer stopped. Forwarded: {self.forwarded}, Failed: {self.failed}")

    def stats(self) -> dict[str, Any]:
        """Snapshot of queue and drainer counters."""
        queue_length = len(self.queue)
        return {
            "queue_length": queue_length,
            "drainer_state": self.state,
            "forwarded": self.forwarded,
            "failed": self.failed,
            "throttle_ms": self.throttle_ms,
            "last_sent_at": self.last_sent_timestamp,
            "estimated_wait_seconds": round(queue_length * self.throttle_ms / 1000, 1),
        }

    async def _drain(self):
        """Forward entries until the queue is empty."""
        try:
            while self.queue:
                decision = can_send_now(self._clock(), self.last_sent_at, self.throttle_ms)

                if not decision.allowed:
                    self.state = DrainerState.SCHEDULED
                    logger.debug(f"Throttled, next check in {decision.wait_ms}ms")
                    await self._sleep(decision.wait_ms / 1000)
                    continue

                await self._forward(self.queue.dequeue())
        finally:
            self.state = DrainerState.IDLE

    async def _forward(self, entry: QueueEntry):
        """
        Send a single entry and settle its future.

        Failures are delivered to the entry only; the loop carries on
        with the next entry.
        """
        self.state = DrainerState.SENDING
        self.last_sent_at = self._clock()
        self.last_sent_timestamp = get_timestamp()
        start_time = self.last_sent_at

        logger.info(f"Sending request {entry.entry_id} at {self.last_sent_timestamp}")
        logger.debug(f"Payload {entry.entry_id}: {truncate_string(safe_json_dumps(entry.payload))}")

        try:
            status_code = await self._send(entry.payload)
        except Exception as e:
            self.failed += 1
            logger.error(f"Error sending webhook for {entry.entry_id}: {str(e)}")
            entry.fail(e)
            return

        result = WebhookResult(
            status_code=status_code,
            success=200 <= status_code < 300,
            delivered_at=get_timestamp()
        )
        self.forwarded += 1

        duration_ms = self._clock() - start_time
        if result.success:
            logger.info(f"Request {entry.entry_id} delivered ({status_code}) in {duration_ms:.0f}ms")
        else:
            logger.warning(f"Webhook answered {status_code} for {entry.entry_id}")

        entry.resolve(result)
