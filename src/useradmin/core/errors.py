"""Project-wide custom exceptions and the error payload shown to operators.

Remote failures are not raised through the admin screen: they travel as
``Err(ErrorInfo)`` values (see :mod:`useradmin.core.result`) so every
"did it succeed" decision is taken from the resolved result. The exception
classes here cover programming errors (dispatching a write that the UI
should have disabled) and the reference API's domain errors.
"""
from __future__ import annotations

import enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

Classification = Literal["network", "http", "invalid_response"]


class ErrorKind(str, enum.Enum):
    """Where an error came from, which decides how the page renders it."""

    READ = "read"    # list query failed: replaces the whole page
    WRITE = "write"  # create / edit / delete failed: page stays usable


class ErrorInfo(BaseModel):
    """Opaque error payload forwarded from the remote user API.

    ``message`` and ``classification`` are passed through as reported; the
    admin screen never rewrites them.
    """
    model_config = ConfigDict(frozen=True)

    message: str
    classification: Classification
    operation: str
    status_code: Optional[int] = None

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.READ if self.operation == "list" else ErrorKind.WRITE


class UserAdminError(Exception):
    """Base class for all custom project exceptions.

    Subclass this rather than ``Exception`` directly for new domain errors.
    """


class MutationInFlightError(UserAdminError):
    """Raised when a write is dispatched while the same kind is still pending.

    The page disables the matching trigger while pending, so reaching this
    means a caller bypassed the view state.
    """
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} already in flight")


class ResultUnwrapError(UserAdminError):
    """Raised by ``Err.unwrap()``; carries the wrapped :class:`ErrorInfo`."""
    def __init__(self, error: ErrorInfo):
        self.error = error
        super().__init__(f"{error.operation} failed ({error.classification}): {error.message}")


__all__ = [
    "Classification",
    "ErrorKind",
    "ErrorInfo",
    "UserAdminError",
    "MutationInFlightError",
    "ResultUnwrapError",
]
