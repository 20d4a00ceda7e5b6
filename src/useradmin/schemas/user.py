"""User schemas in their two forms.

*Wire form* (``UserGQL`` and the request/response payloads) is what the remote
user API sends and accepts: camelCase keys and roles as a list of names.
*Internal form* (``UserRecord``) is what the admin screen renders: roles as a
fixed set of boolean flags. :mod:`useradmin.ui.transform` maps one to the
other.
"""
from __future__ import annotations

from typing import Iterable, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

from .base import WireModel

# Order is the display order of role labels. Adding a role means adding a
# name here and a flag on ``Roles``.
ROLE_NAMES: tuple[str, ...] = ("admin", "editor")


class Roles(BaseModel):
    model_config = ConfigDict(frozen=True)

    admin: bool = False
    editor: bool = False

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "Roles":
        """Build flags from role names, ignoring names outside ``ROLE_NAMES``."""
        wanted = set(names)
        return cls(**{name: name in wanted for name in ROLE_NAMES})

    def names(self) -> list[str]:
        return [name for name in ROLE_NAMES if getattr(self, name)]


class UserRecord(BaseModel):
    """One account as rendered by the admin screen."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    email: str
    # Also read from the wire spelling so camelCase mappings keep their image.
    image_uri: Optional[str] = Field(default=None, validation_alias=AliasChoices("image_uri", "imageUri"))
    roles: Roles = Roles()


class UserFields(BaseModel):
    """Editable fields of a user: a create candidate or an edit submission."""
    name: str
    email: EmailStr
    image_uri: Optional[str] = None
    roles: Roles = Roles()


# ----------------------------------------------------------------------
# Wire form
# ----------------------------------------------------------------------

class UserGQL(WireModel):
    id: str
    name: str
    email: str
    image_uri: Optional[str] = None
    roles: list[str] = []


class UserCreateIn(WireModel):
    name: str
    email: EmailStr
    image_uri: Optional[str] = None
    roles: list[str] = []


class UserEditIn(WireModel):
    # Fields left unset are not touched; ``roles=None`` keeps current roles.
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    image_uri: Optional[str] = None
    roles: Optional[list[str]] = None


class UsersPayload(WireModel):
    users: list[UserGQL]


class CreatedUserPayload(WireModel):
    created_user: UserGQL


class EditedUserPayload(WireModel):
    edited_user: UserGQL


class DeletedIdPayload(WireModel):
    deleted_id: str


__all__ = [
    "ROLE_NAMES",
    "Roles",
    "UserRecord",
    "UserFields",
    "UserGQL",
    "UserCreateIn",
    "UserEditIn",
    "UsersPayload",
    "CreatedUserPayload",
    "EditedUserPayload",
    "DeletedIdPayload",
]
