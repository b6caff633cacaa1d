"""
Rate Gate - decides whether the next webhook call may start now.

The gate is a pure function of the current time, the time of the last
send and the throttle interval. All times are milliseconds on the same
clock; only differences between them are used.
"""

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GateDecision:
    """
    Result of a gate check.

    Attributes:
        allowed: True if a send may start immediately
        wait_ms: Minimum delay before checking again (0 when allowed)
    """
    allowed: bool
    wait_ms: int = 0


def can_send_now(
    now: float,
    last_sent_at: Optional[float],
    interval_ms: int
) -> GateDecision:
    """
    Check whether the throttle interval has elapsed since the last send.

    Args:
        now: Current time in milliseconds
        last_sent_at: Time the previous send started, or None if never
        interval_ms: Required spacing between sends in milliseconds

    Returns:
        GateDecision with allowed=True, or allowed=False and the
        remaining wait rounded up to a whole millisecond
    """
    if last_sent_at is None:
        return GateDecision(allowed=True)

    elapsed = now - last_sent_at
    if elapsed >= interval_ms:
        return GateDecision(allowed=True)

    return GateDecision(allowed=False, wait_ms=math.ceil(interval_ms - elapsed))
