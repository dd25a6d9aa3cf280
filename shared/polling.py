"""Bounded polling loops used instead of fixed sleeps after UI actions."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


class PollTimeoutError(TimeoutError):
    """Raised when a polled value does not satisfy its condition in time."""

    def __init__(self, message: str, last_value: Any = None):
        super().__init__(message)
        self.last_value = last_value


def poll_until(
    read: Callable[[], T],
    predicate: Callable[[T], bool],
    *,
    timeout: float = 10.0,
    interval: float = 0.2,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``read`` until ``predicate`` accepts its result.

    ``read`` is always called at least once, even with a zero timeout.

    Returns:
        The first accepted value.

    Raises:
        PollTimeoutError: If the deadline passes first. The last value read
            is attached as ``last_value``.
    """
    deadline = clock() + timeout
    while True:
        value = read()
        if predicate(value):
            return value
        if clock() >= deadline:
            raise PollTimeoutError(
                f"Condition not met after {timeout}s; last value: {value!r}", value
            )
        sleep(interval)


def poll_until_stable(
    read: Callable[[], T],
    *,
    samples: int = 3,
    timeout: float = 5.0,
    interval: float = 0.1,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``read`` until it returns the same value ``samples`` times in a row.

    Unlike :func:`poll_until` this never raises: a UI that keeps changing
    is reported by returning the most recent reading once the deadline
    passes, and the caller's own assertion decides what that means.
    """
    deadline = clock() + timeout
    value = read()
    streak = 1
    while streak < samples and clock() < deadline:
        sleep(interval)
        current = read()
        if current == value:
            streak += 1
        else:
            value = current
            streak = 1
    return value
