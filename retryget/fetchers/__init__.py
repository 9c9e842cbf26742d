"""Fetchers: one classified GET attempt per call, over requests or curl-cffi."""

from __future__ import annotations

from typing import Any

from ..exceptions import ConfigError
from .base import (
    BaseFetcher,
    FetchOutcome,
    OutcomeKind,
    PermanentFailure,
    Success,
    TransientFailure,
    classify_status,
)
from .curl_cffi_fetcher import CurlCffiFetcher
from .requests_fetcher import RequestsFetcher

FETCHERS: dict[str, type[RequestsFetcher] | type[CurlCffiFetcher]] = {
    RequestsFetcher.name: RequestsFetcher,
    CurlCffiFetcher.name: CurlCffiFetcher,
}


def get_fetcher(name: str, **kwargs: Any) -> BaseFetcher:
    """Return a new fetcher for the transport called *name*."""
    try:
        fetcher_cls = FETCHERS[name]
    except KeyError:
        choices = ", ".join(sorted(FETCHERS))
        raise ConfigError(f"Unknown transport {name!r} (choose from {choices})") from None
    return fetcher_cls(**kwargs)


__all__ = [
    "BaseFetcher",
    "CurlCffiFetcher",
    "FETCHERS",
    "FetchOutcome",
    "OutcomeKind",
    "PermanentFailure",
    "RequestsFetcher",
    "Success",
    "TransientFailure",
    "classify_status",
    "get_fetcher",
]
