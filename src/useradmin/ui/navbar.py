"""Top navigation: role-gated links and the sign-in / sign-out action."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from useradmin.core.auth import AuthContext, is_admin


@dataclass(frozen=True)
class NavLink:
    label: str
    href: str


@dataclass(frozen=True)
class NavAction:
    label: str
    href: Optional[str] = None
    on_click: Optional[Callable[[], None]] = None


@dataclass(frozen=True)
class NavbarView:
    open: bool
    links: tuple[NavLink, ...]
    action: NavAction


class Navbar:
    """Reads the injected auth capability; only the burger state is its own."""

    def __init__(self, auth: AuthContext) -> None:
        self._auth = auth
        self.open = False

    def toggle(self) -> None:
        self.open = not self.open

    def view(self) -> NavbarView:
        links = [NavLink("Home", "/")]
        if is_admin(self._auth):
            links.append(NavLink("Users", "/users"))
        if self._auth.current_user is not None:
            action = NavAction("Sign Out", on_click=self._auth.logout)
        else:
            action = NavAction("Sign In", href="/login")
        return NavbarView(open=self.open, links=tuple(links), action=action)


__all__ = ["NavLink", "NavAction", "NavbarView", "Navbar"]
