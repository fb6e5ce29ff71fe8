"""Bounded exponential-backoff retry driver."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryableOperationError(Exception):
    """Raised by a polled operation to request another attempt."""


class BackoffTimeoutError(Exception):
    """Raised when the poller runs out of its elapsed-time budget."""

    def __init__(self, elapsed_seconds: float, attempts: int) -> None:
        super().__init__(
            f"operation did not succeed within {elapsed_seconds:g} seconds "
            f"({attempts} attempts)"
        )
        self.elapsed_seconds = elapsed_seconds
        self.attempts = attempts


@dataclass(slots=True, frozen=True)
class BackoffPolicy:
    """Exponential backoff configuration, all durations in seconds."""

    initial_interval: float = 0.5
    multiplier: float = 1.5
    randomization_factor: float = 0.5
    max_interval: float = 60.0
    max_elapsed_time: float = 900.0

    def __post_init__(self) -> None:
        if self.initial_interval <= 0:
            raise ValueError("initial_interval must be > 0.")
        if self.multiplier < 1:
            raise ValueError("multiplier must be >= 1.")
        if not 0 <= self.randomization_factor <= 1:
            raise ValueError("randomization_factor must be within [0, 1].")
        if self.max_interval < self.initial_interval:
            raise ValueError("max_interval must be >= initial_interval.")
        if self.max_elapsed_time <= 0:
            raise ValueError("max_elapsed_time must be > 0.")

    def interval(self, attempt: int) -> float:
        """Return the un-jittered delay after failed attempt number `attempt` (0-based)."""

        return min(self.initial_interval * self.multiplier**attempt, self.max_interval)


class BackoffPoller:
    """Invoke an operation until it succeeds, fails fatally or the budget runs out.

    The operation signals a transient condition by raising
    `RetryableOperationError`. Any other exception is fatal and propagates
    immediately. Attempts run one at a time on the calling thread, separated
    by jittered exponentially growing sleeps. A fresh retry clock starts on
    every `run` call, so one poller can serve many independent sessions.
    """

    def __init__(
        self,
        policy: BackoffPolicy,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._policy = policy
        self._clock = clock
        self._sleep = sleep
        self._rng = rng or random.Random()

    @property
    def policy(self) -> BackoffPolicy:
        return self._policy

    def run(self, operation: Callable[[], T]) -> T:
        """Return the first successful result of `operation`."""

        started_at = self._clock()
        attempt = 0
        while True:
            try:
                return operation()
            except RetryableOperationError as exc:
                last_error = exc

            attempt += 1
            if self._clock() - started_at > self._policy.max_elapsed_time:
                raise BackoffTimeoutError(
                    self._policy.max_elapsed_time,
                    attempts=attempt,
                ) from last_error

            delay = self._jittered(self._policy.interval(attempt - 1))
            logger.debug(
                "Attempt %s failed (%s); retrying in %.2fs.",
                attempt,
                last_error,
                delay,
            )
            self._sleep(delay)

    def _jittered(self, interval: float) -> float:
        factor = self._policy.randomization_factor
        if factor == 0:
            return interval
        delta = interval * factor
        return self._rng.uniform(interval - delta, interval + delta)


__all__ = [
    "BackoffPolicy",
    "BackoffPoller",
    "BackoffTimeoutError",
    "RetryableOperationError",
]
