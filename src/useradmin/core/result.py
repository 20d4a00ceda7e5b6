"""Tagged result of one remote call: ``Ok(payload)`` or ``Err(ErrorInfo)``."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import ErrorInfo, ResultUnwrapError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: ErrorInfo

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise ResultUnwrapError(self.error)


Result = Union[Ok[T], Err]

__all__ = ["Ok", "Err", "Result"]
