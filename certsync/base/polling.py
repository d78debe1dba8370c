"""
Polling utilities for eventually-consistent remote state.

Provides :class:`PollPolicy`, an explicit description of how long to keep
asking, and :func:`poll`, the coroutine that applies it. Waits go through
:func:`asyncio.sleep` by default so an enclosing deadline can cancel them;
tests inject a zero-wait ``sleep`` and a fake ``clock``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger("certsync")

T = TypeVar("T")


@dataclass(frozen=True)
class PollPolicy:
    """How often and for how long to poll.

    Attributes:
        interval: Delay in seconds before the first retry.
        max_attempts: Maximum number of total attempts (including the first).
            ``None`` means unbounded.
        max_duration: Give up once this many seconds have elapsed since the
            first attempt. ``None`` means unbounded.
        backoff_factor: Multiplier applied to the delay after each retry.
            ``1.0`` keeps a fixed interval.
        max_interval: Cap on the delay between retries.
    """

    interval: float = 10.0
    max_attempts: int | None = None
    max_duration: float | None = None
    backoff_factor: float = 1.0
    max_interval: float = 60.0

    def delays(self):
        """Yield the successive waits this policy allows between attempts."""
        delay = self.interval
        while True:
            yield delay
            delay = min(delay * self.backoff_factor, max(self.max_interval, self.interval))


class PollExhausted(Exception):
    """Raised by :func:`poll` when the policy runs out before a result is ready.

    Attributes:
        attempts: Number of attempts made.
        elapsed: Seconds elapsed since the first attempt.
    """

    def __init__(self, attempts: int, elapsed: float) -> None:
        self.attempts = attempts
        self.elapsed = elapsed
        super().__init__(f"gave up after {attempts} attempt(s) in {elapsed:.1f}s")


async def poll(
    fetch: Callable[[], Awaitable[T]],
    ready: Callable[[T], bool],
    policy: PollPolicy,
    *,
    description: str = "",
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """Call *fetch* until *ready* accepts its result.

    Exceptions raised by *fetch* propagate immediately; only "not ready yet"
    results are retried.

    Args:
        fetch: Coroutine function producing a candidate result.
        ready: Predicate deciding whether the result is final.
        policy: Retry schedule and ceilings.
        description: Used in log messages.
        sleep: Awaitable sleep, replaceable in tests.
        clock: Monotonic clock, replaceable in tests.

    Returns:
        The first result accepted by *ready*.

    Raises:
        PollExhausted: If ``max_attempts`` or ``max_duration`` is reached.
    """
    started = clock()
    delays = policy.delays()
    attempt = 0
    while True:
        attempt += 1
        result = await fetch()
        if ready(result):
            return result

        elapsed = clock() - started
        if policy.max_attempts is not None and attempt >= policy.max_attempts:
            raise PollExhausted(attempt, elapsed)

        delay = next(delays)
        if policy.max_duration is not None:
            remaining = policy.max_duration - elapsed
            if remaining <= 0:
                raise PollExhausted(attempt, elapsed)
            delay = min(delay, remaining)

        logger.info(
            "%s not ready after attempt %d, polling again in %.1fs",
            description or "result",
            attempt,
            delay,
        )
        await sleep(delay)
