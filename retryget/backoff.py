"""Exponential backoff schedule bounded by an elapsed-time budget."""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass
from typing import Callable

from tenacity import RetryCallState
from tenacity.stop import stop_base
from tenacity.wait import wait_exponential

from .exceptions import ConfigError

DEFAULT_INITIAL_INTERVAL = 0.5
DEFAULT_MULTIPLIER = 1.5
DEFAULT_RANDOMIZATION_FACTOR = 0.5
DEFAULT_MAX_INTERVAL = 60.0
DEFAULT_MAX_ELAPSED_TIME = 2.0


def require_positive(name: str, value: float) -> None:
    if not (math.isfinite(value) and value > 0):
        raise ConfigError(f"{name} must be a positive finite number, got {value!r}")


@dataclass(frozen=True)
class BackoffSchedule:
    """Retry timing for one fetch. All durations are in seconds."""

    initial_interval: float = DEFAULT_INITIAL_INTERVAL
    multiplier: float = DEFAULT_MULTIPLIER
    randomization_factor: float = DEFAULT_RANDOMIZATION_FACTOR
    max_interval: float = DEFAULT_MAX_INTERVAL
    max_elapsed_time: float = DEFAULT_MAX_ELAPSED_TIME

    def __post_init__(self) -> None:
        require_positive("initial_interval", self.initial_interval)
        require_positive("max_interval", self.max_interval)
        require_positive("max_elapsed_time", self.max_elapsed_time)
        if not (math.isfinite(self.multiplier) and self.multiplier >= 1):
            raise ConfigError("multiplier must be a finite number of at least 1")
        if not 0 <= self.randomization_factor < 1:
            raise ConfigError("randomization_factor must be in [0, 1)")
        if self.max_interval < self.initial_interval:
            raise ConfigError("max_interval must not be below initial_interval")

    def jittered(self, interval: float, rng: random.Random | None = None) -> float:
        """Return *interval* randomized by +/- ``randomization_factor``."""
        delta = self.randomization_factor * interval
        uniform = rng.uniform if rng is not None else random.uniform
        return uniform(interval - delta, interval + delta)

    def wait(self, rng: random.Random | None = None) -> wait_jittered_exponential:
        return wait_jittered_exponential(self, rng)

    def stop(self, clock: Callable[[], float] = time.monotonic) -> stop_before_budget:
        return stop_before_budget(self.max_elapsed_time, clock)


class wait_jittered_exponential(wait_exponential):
    """``wait_exponential`` capped at ``max_interval``, then jittered.

    The n-th retry waits around ``initial_interval * multiplier ** (n - 1)``.
    """

    def __init__(self, schedule: BackoffSchedule, rng: random.Random | None = None) -> None:
        super().__init__(
            multiplier=schedule.initial_interval,
            max=schedule.max_interval,
            exp_base=schedule.multiplier,
        )
        self.schedule = schedule
        self.rng = rng

    def __call__(self, retry_state: RetryCallState) -> float:
        return self.schedule.jittered(super().__call__(retry_state), self.rng)


class stop_before_budget(stop_base):
    """Stop when the next sleep would carry past ``max_elapsed_time``.

    Same rule as tenacity's ``stop_before_delay``, but elapsed time is read
    from *clock*, starting when the strategy is built.
    """

    def __init__(self, max_elapsed_time: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.max_elapsed_time = max_elapsed_time
        self.clock = clock
        self.started = clock()

    def __call__(self, retry_state: RetryCallState) -> bool:
        elapsed = self.clock() - self.started
        return elapsed + retry_state.upcoming_sleep > self.max_elapsed_time
