"""Final result of a retried fetch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .exceptions import PermanentError, TransientError


@dataclass(frozen=True)
class Ok:
    """The fetch produced a response."""

    response: Any
    attempts: int = 1


# The error variants are exceptions so fetch_or_raise can raise them as-is.
FinalResult = Union[Ok, PermanentError, TransientError]

__all__ = ["Ok", "PermanentError", "TransientError", "FinalResult"]
