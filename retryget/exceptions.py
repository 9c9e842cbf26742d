"""Custom exceptions for retryget."""

from __future__ import annotations


class ConfigError(ValueError):
    """Invalid configuration value."""


class FetchError(Exception):
    """A fetch ended without a usable response."""

    def __init__(
        self,
        message: str,
        cause: BaseException,
        attempts: int,
        status_code: int | None = None,
    ):
        self.cause = cause
        self.attempts = attempts
        # None when no HTTP response arrived
        self.status_code = status_code
        super().__init__(message)
        self.__cause__ = cause


class PermanentError(FetchError):
    """Client error or transport failure. Never retried."""

    def __init__(self, cause: BaseException, attempts: int = 1, status_code: int | None = None):
        super().__init__(str(cause), cause=cause, attempts=attempts, status_code=status_code)


class TransientError(FetchError):
    """Server error that persisted until the retry budget ran out."""

    def __init__(self, cause: BaseException, attempts: int, status_code: int | None = None):
        super().__init__(
            f"The request failed {attempts} times: {cause}",
            cause=cause,
            attempts=attempts,
            status_code=status_code,
        )
