"""CurlCffiFetcher: browser TLS impersonation via curl-cffi."""

from __future__ import annotations

from curl_cffi import requests as curl_requests
from curl_cffi.requests.exceptions import HTTPError, RequestException
from loguru import logger

from .base import FetchOutcome, PermanentFailure, outcome_for_response


class CurlCffiFetcher:
    """Fetcher using curl-cffi with browser TLS fingerprint impersonation."""

    name = "curl_cffi"

    def __init__(self, timeout: float = 30.0, impersonate: str = "chrome"):
        self.timeout = timeout
        self.impersonate = impersonate

    def attempt(self, url: str) -> FetchOutcome:
        """GET *url* once using curl-cffi."""
        logger.info(f"fetching {url}")
        try:
            response = curl_requests.get(
                url,
                impersonate=self.impersonate,
                timeout=self.timeout,
            )
        except RequestException as exc:
            logger.debug(f"curl-cffi connection failed for {url}: {exc}")
            return PermanentFailure(cause=exc)

        return outcome_for_response(response, HTTPError)
