"""Resilient HTTP GET: permanent failures stop, transient ones back off and retry."""

from .backoff import BackoffSchedule
from .engine import RetryEngine, fetch, fetch_or_raise
from .exceptions import ConfigError, FetchError, PermanentError, TransientError
from .fetchers import get_fetcher
from .results import FinalResult, Ok

__all__ = [
    "BackoffSchedule",
    "ConfigError",
    "FetchError",
    "FinalResult",
    "Ok",
    "PermanentError",
    "RetryEngine",
    "TransientError",
    "fetch",
    "fetch_or_raise",
    "get_fetcher",
]
