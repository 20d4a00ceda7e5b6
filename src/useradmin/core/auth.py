"""Signed-in operator as seen by the admin screen.

Authentication itself happens elsewhere; the screen only needs to know who
is signed in, which role flags they carry, and how to sign them out. The
capability is injected into the controller and the navbar and only ever
read there.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from pydantic import BaseModel, ConfigDict

from useradmin.schemas.user import Roles

logger = logging.getLogger(__name__)


class CurrentUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    roles: Roles = Roles()


class AuthContext(Protocol):
    @property
    def current_user(self) -> Optional[CurrentUser]: ...

    def logout(self) -> None: ...


class SessionAuth:
    """In-memory ``AuthContext`` holding the user resolved at sign-in."""

    def __init__(
        self,
        user: Optional[CurrentUser] = None,
        on_logout: Optional[Callable[[], None]] = None,
    ) -> None:
        self._user = user
        self._on_logout = on_logout

    @property
    def current_user(self) -> Optional[CurrentUser]:
        return self._user

    def logout(self) -> None:
        if self._user is None:
            return
        logger.info("auth.logout", extra={"user_id": self._user.id})
        self._user = None
        if self._on_logout is not None:
            self._on_logout()


def is_admin(auth: AuthContext) -> bool:
    user = auth.current_user
    return bool(user and user.roles.admin)


def can_manage_users(auth: AuthContext) -> bool:
    """Admins and editors see the create / edit / delete affordances."""
    user = auth.current_user
    return bool(user and (user.roles.admin or user.roles.editor))


__all__ = ["CurrentUser", "AuthContext", "SessionAuth", "is_admin", "can_manage_users"]
