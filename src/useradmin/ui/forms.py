"""Props handed to the edit / delete modals.

The modals themselves are rendered elsewhere; they receive plain data and
the callbacks to invoke.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from useradmin.schemas.user import UserFields, UserRecord


@dataclass(frozen=True)
class EditUserFormProps:
    show: bool
    init_user: Optional[UserRecord]
    editing_user: bool
    edit_selected_user: Callable[[UserFields], Awaitable[Any]]
    close: Callable[[], None]


@dataclass(frozen=True)
class DeleteUserProps:
    show: bool
    user: UserRecord
    deleting_user: bool
    delete_selected_user: Callable[[], Awaitable[Any]]
    close: Callable[[], None]


__all__ = ["EditUserFormProps", "DeleteUserProps"]
