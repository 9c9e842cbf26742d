"""RequestsFetcher: plain GET via requests."""

from __future__ import annotations

import requests
from loguru import logger

from .base import FetchOutcome, PermanentFailure, outcome_for_response


class RequestsFetcher:
    """Fetcher using the requests library. The default transport."""

    name = "requests"

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout

    def attempt(self, url: str) -> FetchOutcome:
        """GET *url* once. Connection-level failures are permanent."""
        logger.info(f"fetching {url}")
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.debug(f"requests could not reach {url}: {exc}")
            return PermanentFailure(cause=exc)

        return outcome_for_response(response, requests.HTTPError)
