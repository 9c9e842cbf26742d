"""RetryEngine: drives a fetcher under an exponential backoff schedule."""

from __future__ import annotations

import random
import time
from typing import Any, Callable

from loguru import logger
from tenacity import RetryCallState, RetryError, Retrying, retry_if_result

from .backoff import BackoffSchedule
from .config import Settings, schedule_from_env
from .fetchers import BaseFetcher, FetchOutcome, OutcomeKind, RequestsFetcher, get_fetcher
from .results import FinalResult, Ok, PermanentError, TransientError


def _is_transient(outcome: FetchOutcome) -> bool:
    return outcome.kind is OutcomeKind.TRANSIENT


class RetryEngine:
    """Retries transient failures until the elapsed-time budget runs out.

    The engine keeps no per-call state, so one instance can serve any number
    of concurrent ``fetch`` calls.
    """

    def __init__(
        self,
        fetcher: BaseFetcher | None = None,
        schedule_factory: Callable[[], BackoffSchedule] = schedule_from_env,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ) -> None:
        self.fetcher = fetcher or RequestsFetcher()
        self.schedule_factory = schedule_factory
        self.sleep = sleep
        self.clock = clock
        self.rng = rng

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> RetryEngine:
        """Build an engine whose transport and schedule come from *settings*."""
        fetcher = get_fetcher(settings.transport, timeout=settings.http_timeout)
        return cls(fetcher=fetcher, schedule_factory=settings.backoff_schedule, **kwargs)

    def fetch(self, url: str) -> FinalResult:
        """GET *url*, retrying server errors with backoff.

        Returns ``Ok`` on success, ``PermanentError`` on a client error or
        transport failure (never retried), and ``TransientError`` when server
        errors outlast the schedule's ``max_elapsed_time``.
        """
        schedule = self.schedule_factory()

        def log_retry(retry_state: RetryCallState) -> None:
            logger.debug(
                f"Attempt {retry_state.attempt_number} for {url} failed, "
                f"retrying in {retry_state.upcoming_sleep:.2f}s"
            )

        retrying = Retrying(
            retry=retry_if_result(_is_transient),
            wait=schedule.wait(self.rng),
            stop=schedule.stop(self.clock),
            sleep=self.sleep,
            before_sleep=log_retry,
        )

        attempts = 0
        outcome: FetchOutcome | None = None
        try:
            for attempt in retrying:
                with attempt:
                    attempts += 1
                    outcome = self.fetcher.attempt(url)
                if not attempt.retry_state.outcome.failed:
                    attempt.retry_state.set_result(outcome)
        except RetryError:
            logger.error(
                f"Retry budget of {schedule.max_elapsed_time}s spent on {url} "
                f"after {attempts} attempts"
            )
            return TransientError(
                cause=outcome.cause, attempts=attempts, status_code=outcome.status_code
            )

        if outcome.kind is OutcomeKind.PERMANENT:
            logger.warning(f"Not retrying {url}: {outcome.cause}")
            return PermanentError(
                cause=outcome.cause, attempts=attempts, status_code=outcome.status_code
            )
        return Ok(response=outcome.response, attempts=attempts)


def fetch(url: str) -> FinalResult:
    """Fetch *url* with an engine configured from the environment."""
    return RetryEngine.from_settings(Settings.from_env()).fetch(url)


def fetch_or_raise(url: str) -> Any:
    """Fetch *url* and return the response, raising the error variant on failure."""
    result = fetch(url)
    if isinstance(result, Ok):
        return result.response
    raise result
