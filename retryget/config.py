"""Environment-driven settings.

Values are read from ``RETRYGET_*`` variables, optionally seeded from a
``.env`` file in the working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .backoff import (
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MAX_ELAPSED_TIME,
    DEFAULT_MAX_INTERVAL,
    DEFAULT_MULTIPLIER,
    DEFAULT_RANDOMIZATION_FACTOR,
    BackoffSchedule,
    require_positive,
)
from .exceptions import ConfigError

load_dotenv()

DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_TRANSPORT = "requests"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    initial_interval: float = DEFAULT_INITIAL_INTERVAL
    multiplier: float = DEFAULT_MULTIPLIER
    randomization_factor: float = DEFAULT_RANDOMIZATION_FACTOR
    max_interval: float = DEFAULT_MAX_INTERVAL
    max_elapsed_time: float = DEFAULT_MAX_ELAPSED_TIME
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    transport: str = DEFAULT_TRANSPORT

    def __post_init__(self) -> None:
        require_positive("http_timeout", self.http_timeout)
        self.backoff_schedule()

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the current environment."""
        return cls(
            initial_interval=_env_float("RETRYGET_INITIAL_INTERVAL", DEFAULT_INITIAL_INTERVAL),
            multiplier=_env_float("RETRYGET_MULTIPLIER", DEFAULT_MULTIPLIER),
            randomization_factor=_env_float(
                "RETRYGET_RANDOMIZATION_FACTOR", DEFAULT_RANDOMIZATION_FACTOR
            ),
            max_interval=_env_float("RETRYGET_MAX_INTERVAL", DEFAULT_MAX_INTERVAL),
            max_elapsed_time=_env_float("RETRYGET_MAX_ELAPSED_TIME", DEFAULT_MAX_ELAPSED_TIME),
            http_timeout=_env_float("RETRYGET_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            transport=os.getenv("RETRYGET_TRANSPORT") or DEFAULT_TRANSPORT,
        )

    def backoff_schedule(self) -> BackoffSchedule:
        return BackoffSchedule(
            initial_interval=self.initial_interval,
            multiplier=self.multiplier,
            randomization_factor=self.randomization_factor,
            max_interval=self.max_interval,
            max_elapsed_time=self.max_elapsed_time,
        )


def schedule_from_env() -> BackoffSchedule:
    """Fresh backoff schedule built from the environment."""
    return Settings.from_env().backoff_schedule()
