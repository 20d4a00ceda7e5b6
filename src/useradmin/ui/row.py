"""One user card and its two row-local modals."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from useradmin.core.result import Result
from useradmin.schemas.user import UserFields, UserRecord
from useradmin.ui.forms import DeleteUserProps, EditUserFormProps

PLACEHOLDER_AVATAR = "images/placeholder.png"

EditUserFn = Callable[[str, UserFields], Awaitable[Result[Any]]]
DeleteUserFn = Callable[[str], Awaitable[Result[Any]]]


def roles_label(user: UserRecord) -> str:
    labels = [name.capitalize() for name in user.roles.names()]
    return ", ".join(labels) if labels else "None"


def avatar_uri(user: UserRecord) -> str:
    return user.image_uri or PLACEHOLDER_AVATAR


@dataclass(frozen=True)
class UserRowView:
    user: UserRecord
    roles_label: str
    avatar_uri: str
    can_manage: bool
    editing_user: bool
    deleting_user: bool
    open_edit: Callable[[], None]
    open_delete: Callable[[], None]
    edit_form: EditUserFormProps
    delete_form: DeleteUserProps


class UserRow:
    """Binds one ``UserRecord`` to the controller's edit / delete functions.

    The row only owns which of its modals is open. Pending flags are the
    page-wide ones handed to :meth:`view`, and the writes themselves go
    through ``edit_user`` / ``delete_user`` with nothing but this row's id
    and the submitted fields.
    """

    def __init__(self, user: UserRecord, edit_user: EditUserFn, delete_user: DeleteUserFn) -> None:
        self.user = user
        self._edit_user = edit_user
        self._delete_user = delete_user
        self.edit_panel_open = False
        self.delete_confirm_open = False

    @property
    def id(self) -> str:
        return self.user.id

    def open_edit(self) -> None:
        self.edit_panel_open = True

    def close_edit(self) -> None:
        self.edit_panel_open = False

    def open_delete(self) -> None:
        self.delete_confirm_open = True

    def close_delete(self) -> None:
        self.delete_confirm_open = False

    async def submit_edit(self, fields: UserFields) -> Result[Any]:
        # Once dispatched the panel closes whatever the outcome; there is no
        # retry surface. A refused dispatch leaves it open.
        result = await self._edit_user(self.id, fields)
        self.close_edit()
        return result

    async def submit_delete(self) -> Result[Any]:
        result = await self._delete_user(self.id)
        self.close_delete()
        return result

    def view(self, editing: bool, deleting: bool, can_manage: bool = True) -> UserRowView:
        return UserRowView(
            user=self.user,
            roles_label=roles_label(self.user),
            avatar_uri=avatar_uri(self.user),
            can_manage=can_manage,
            editing_user=editing,
            deleting_user=deleting,
            open_edit=self.open_edit,
            open_delete=self.open_delete,
            edit_form=EditUserFormProps(
                show=can_manage and self.edit_panel_open,
                init_user=self.user,
                editing_user=editing,
                edit_selected_user=self.submit_edit,
                close=self.close_edit,
            ),
            delete_form=DeleteUserProps(
                show=can_manage and self.delete_confirm_open,
                user=self.user,
                deleting_user=deleting,
                delete_selected_user=self.submit_delete,
                close=self.close_delete,
            ),
        )


__all__ = ["PLACEHOLDER_AVATAR", "UserRow", "UserRowView", "roles_label", "avatar_uri"]
