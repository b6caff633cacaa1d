"""Shared test fixtures for the webhook relay."""
import asyncio
from typing import Any

import pytest

from app.queue.forwarding import ForwardingQueue
from app.workers.drainer import QueueDrainer


class FakeClock:
    """
    Virtual millisecond clock.

    sleep() advances time instead of waiting, so throttle intervals of
    several seconds complete instantly. `drift` < 1 makes sleeps wake up
    early, as a timer firing ahead of the wall clock would.
    """

    def __init__(self, drift: float = 1.0):
        self.now_ms = 0.0
        self.drift = drift
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.now_ms

    def advance(self, ms: float):
        self.now_ms += ms

    async def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now_ms += seconds * 1000 * self.drift
        await asyncio.sleep(0)


class FakeWebhook:
    """
    Records every call with the virtual time at which it started.

    `responses` maps a call index to a status code or an exception to
    raise; unmapped calls answer `default_status`. `latency_ms` advances
    the clock while the call is "in flight".
    """

    def __init__(self, clock: FakeClock, default_status: int = 200, latency_ms: float = 0):
        self.clock = clock
        self.default_status = default_status
        self.latency_ms = latency_ms
        self.responses: dict[int, Any] = {}
        self.calls: list[tuple[float, Any]] = []

    async def send(self, payload: Any) -> int:
        index = len(self.calls)
        self.calls.append((self.clock.now(), payload))
        if self.latency_ms:
            self.clock.advance(self.latency_ms)
            await asyncio.sleep(0)
        response = self.responses.get(index, self.default_status)
        if isinstance(response, BaseException):
            raise response
        return response

    @property
    def start_times(self) -> list[float]:
        return [t for t, _ in self.calls]

    @property
    def payloads(self) -> list[Any]:
        return [p for _, p in self.calls]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def webhook(clock) -> FakeWebhook:
    return FakeWebhook(clock)


@pytest.fixture
def drainer(clock, webhook) -> QueueDrainer:
    """Drainer with the default 15 s throttle on a virtual clock."""
    return QueueDrainer(
        ForwardingQueue(),
        send=webhook.send,
        throttle_ms=15000,
        clock=clock.now,
        sleep=clock.sleep
    )
