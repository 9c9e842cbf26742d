"""Base types for the fetchers: per-attempt outcomes and status classification."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Protocol, Union

from loguru import logger


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    PERMANENT = "permanent"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class Success:
    """A response arrived with a non-error status."""

    response: Any
    kind = OutcomeKind.SUCCESS


@dataclass(frozen=True)
class PermanentFailure:
    """The attempt failed in a way retrying will not fix."""

    cause: BaseException
    status_code: int | None = None
    kind = OutcomeKind.PERMANENT


@dataclass(frozen=True)
class TransientFailure:
    """The server failed; the same request may succeed later."""

    cause: BaseException
    status_code: int | None = None
    kind = OutcomeKind.TRANSIENT


FetchOutcome = Union[Success, PermanentFailure, TransientFailure]


def classify_status(status_code: int) -> OutcomeKind:
    """Map an HTTP status code to exactly one outcome kind.

    4xx is permanent, 5xx is transient, anything else counts as success.
    """
    if 400 <= status_code < 500:
        return OutcomeKind.PERMANENT
    if 500 <= status_code < 600:
        return OutcomeKind.TRANSIENT
    return OutcomeKind.SUCCESS


def fill_reason(response: Any) -> None:
    """Set the standard reason phrase when the server did not send one."""
    if getattr(response, "reason", None):
        return
    try:
        response.reason = HTTPStatus(response.status_code).phrase
    except ValueError:
        pass


def outcome_for_response(response: Any, status_error: type[Exception]) -> FetchOutcome:
    """Classify a received response, building the cause from ``raise_for_status``."""
    status_code = response.status_code
    kind = classify_status(status_code)
    if kind is OutcomeKind.SUCCESS:
        return Success(response=response)

    fill_reason(response)
    cause: BaseException | None = None
    try:
        response.raise_for_status()
    except status_error as exc:
        cause = exc
    if cause is None:
        cause = status_error(
            f"{status_code} {response.reason} for url: {response.url}"
        )

    if kind is OutcomeKind.TRANSIENT:
        logger.warning(f"fetch failed with status {status_code} {response.reason}")
        return TransientFailure(cause=cause, status_code=status_code)
    return PermanentFailure(cause=cause, status_code=status_code)


class BaseFetcher(Protocol):
    """Protocol that all fetchers must implement."""

    name: str

    def attempt(self, url: str) -> FetchOutcome:
        """Make exactly one GET request for *url* and classify what happened."""
        ...
