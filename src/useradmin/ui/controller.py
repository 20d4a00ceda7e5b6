"""Synchronization core of the user administration page.

``UserListController`` owns the list read, the three writes, one
``MutationState`` per write kind and the page error slot. It keeps the
rendered list a function of the latest successful read, updated after
every successful write according to :mod:`useradmin.ui.policy`:

* create and delete re-run the list read, so server-assigned ids and any
  server-side effects show up;
* edit patches the matching entry from the ``editedUser`` response, or
  re-reads when it resolves while a list read is in flight.

Writes are serialized per kind: while ``create_state.pending`` is true the
create trigger is disabled and a second :meth:`create` raises
``MutationInFlightError``. All success / failure decisions are taken from
the awaited ``Result``; a read that resolves after a newer read has
started is dropped.

``last_error`` is cleared whenever a new operation starts. A write error is
rendered as a banner over the list, a read error replaces the page.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from useradmin.client.remote import RemoteUserAPI
from useradmin.core.auth import AuthContext, can_manage_users
from useradmin.core.config import Settings, get_settings
from useradmin.core.errors import ErrorInfo, MutationInFlightError
from useradmin.core.result import Ok, Result
from useradmin.schemas.user import (
    CreatedUserPayload,
    DeletedIdPayload,
    EditedUserPayload,
    UserFields,
    UserRecord,
)
from useradmin.ui.forms import EditUserFormProps
from useradmin.ui.policy import (
    REFRESH_POLICY,
    ErrorPolicy,
    RefreshPolicy,
    WriteOperation,
    error_policy_for,
)
from useradmin.ui.row import UserRow, UserRowView
from useradmin.ui.transform import transform_user_from_gql

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# State
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Loaded:
    users: tuple[UserRecord, ...] = ()


@dataclass(frozen=True)
class Failed:
    error: ErrorInfo


ListQueryState = Union[Loading, Loaded, Failed]


@dataclass
class MutationState:
    pending: bool = False
    error: Optional[ErrorInfo] = None


# ----------------------------------------------------------------------
# Views
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class LoadingView:
    pass


@dataclass(frozen=True)
class ErrorView:
    error: ErrorInfo


@dataclass(frozen=True)
class ListView:
    rows: tuple[UserRowView, ...]
    can_manage: bool
    create_enabled: bool
    create_form: EditUserFormProps
    error: Optional[ErrorInfo] = None
    title: str = field(default="Users")


PageView = Union[LoadingView, ErrorView, ListView]


class UserListController:
    def __init__(
        self,
        api: RemoteUserAPI,
        auth: AuthContext,
        settings: Optional[Settings] = None,
    ) -> None:
        self._api = api
        self._auth = auth
        self._settings = settings or get_settings()
        self.page_size = self._settings.users_page_size

        self.list_state: ListQueryState = Loading()
        self.create_state = MutationState()
        self.edit_state = MutationState()
        self.delete_state = MutationState()
        self.last_error: Optional[ErrorInfo] = None
        self.create_modal_open = False

        self._rows: dict[str, UserRow] = {}
        self._read_generation = 0

    # -- derived state -------------------------------------------------

    @property
    def users(self) -> tuple[UserRecord, ...]:
        state = self.list_state
        return state.users if isinstance(state, Loaded) else ()

    @property
    def rows(self) -> Sequence[UserRow]:
        return tuple(self._rows.values())

    def row(self, id: str) -> UserRow:
        return self._rows[id]

    @property
    def can_manage(self) -> bool:
        return can_manage_users(self._auth)

    @property
    def can_create(self) -> bool:
        return (
            self.can_manage
            and isinstance(self.list_state, Loaded)
            and not self.create_state.pending
        )

    def open_create(self) -> None:
        if self.can_create:
            self.create_modal_open = True

    def close_create(self) -> None:
        self.create_modal_open = False

    # -- read ----------------------------------------------------------

    async def list(self, limit: Optional[int] = None) -> ListQueryState:
        """(Re)run the list read and return the resulting state."""
        self._read_generation += 1
        generation = self._read_generation
        self.last_error = None
        self.list_state = Loading()

        result = await self._api.list(limit if limit is not None else self.page_size)

        if generation != self._read_generation:
            logger.debug(
                "users.list.stale_response",
                extra={"generation": generation, "current": self._read_generation},
            )
            return self.list_state
        if isinstance(result, Ok):
            users = tuple(transform_user_from_gql(u) for u in result.value.users)
            self._set_users(users)
            logger.info("users.list.loaded", extra={"count": len(users)})
        else:
            self.list_state = Failed(result.error)
            self.last_error = result.error
            logger.warning(
                "users.list.failed",
                extra={"classification": result.error.classification, "detail": result.error.message},
            )
        return self.list_state

    # -- writes --------------------------------------------------------

    async def create(self, fields: UserFields) -> Result[CreatedUserPayload]:
        result = await self._dispatch("create", self.create_state, lambda: self._api.create(fields))
        # The form is dismissed on failure too; the input is not kept.
        self.close_create()
        if isinstance(result, Ok):
            await self._refresh("create", upsert=transform_user_from_gql(result.value.created_user))
        else:
            self._fail("create", self.create_state, result.error)
        return result

    async def edit(self, id: str, fields: UserFields) -> Result[EditedUserPayload]:
        result = await self._dispatch("edit", self.edit_state, lambda: self._api.edit(id, fields))
        if isinstance(result, Ok):
            await self._refresh("edit", upsert=transform_user_from_gql(result.value.edited_user))
        else:
            self._fail("edit", self.edit_state, result.error)
        return result

    async def delete_user(self, id: str) -> Result[DeletedIdPayload]:
        result = await self._dispatch("delete", self.delete_state, lambda: self._api.delete(id))
        if isinstance(result, Ok):
            await self._refresh("delete", removed_id=result.value.deleted_id)
        else:
            self._fail("delete", self.delete_state, result.error)
        return result

    async def _dispatch(
        self,
        operation: WriteOperation,
        state: MutationState,
        call: Callable[[], Awaitable[Result[Any]]],
    ) -> Result[Any]:
        if state.pending:
            raise MutationInFlightError(operation)
        state.pending = True
        state.error = None
        self.last_error = None
        try:
            return await call()
        finally:
            state.pending = False

    def _fail(self, operation: WriteOperation, state: MutationState, error: ErrorInfo) -> None:
        state.error = error
        policy = error_policy_for(operation, self._settings)
        if policy is ErrorPolicy.RECORD:
            self.last_error = error
        logger.warning(
            f"users.{operation}.failed",
            extra={
                "classification": error.classification,
                "detail": error.message,
                "status_code": error.status_code,
                "error_policy": policy.value,
            },
        )

    async def _refresh(
        self,
        operation: WriteOperation,
        upsert: Optional[UserRecord] = None,
        removed_id: Optional[str] = None,
    ) -> None:
        if REFRESH_POLICY[operation] is RefreshPolicy.REFETCH:
            await self.list()
            return
        state = self.list_state
        if isinstance(state, Loading):
            # The read in flight may have been answered before this write
            # committed; re-read so the list cannot land without it.
            await self.list()
            return
        if not isinstance(state, Loaded):
            return
        users = [u for u in state.users if u.id != removed_id]
        if upsert is not None:
            ids = [u.id for u in users]
            if upsert.id in ids:
                users[ids.index(upsert.id)] = upsert
            else:
                users.append(upsert)
        self._set_users(tuple(users))

    def _set_users(self, users: tuple[UserRecord, ...]) -> None:
        # Rows are keyed by id so their open modals survive a refresh.
        rows: dict[str, UserRow] = {}
        for user in users:
            row = self._rows.get(user.id)
            if row is None:
                row = UserRow(user, self.edit, self.delete_user)
            else:
                row.user = user
            rows[user.id] = row
        self._rows = rows
        self.list_state = Loaded(users)

    # -- rendering -----------------------------------------------------

    def render(self) -> PageView:
        state = self.list_state
        if isinstance(state, Failed):
            return ErrorView(error=state.error)
        if isinstance(state, Loading):
            return LoadingView()
        can_manage = self.can_manage
        return ListView(
            rows=tuple(
                row.view(
                    editing=self.edit_state.pending,
                    deleting=self.delete_state.pending,
                    can_manage=can_manage,
                )
                for row in self._rows.values()
            ),
            can_manage=can_manage,
            create_enabled=self.can_create,
            create_form=EditUserFormProps(
                show=can_manage and self.create_modal_open,
                init_user=None,
                editing_user=self.create_state.pending,
                edit_selected_user=self.create,
                close=self.close_create,
            ),
            error=self.last_error,
        )


__all__ = [
    "Loading",
    "Loaded",
    "Failed",
    "ListQueryState",
    "MutationState",
    "LoadingView",
    "ErrorView",
    "ListView",
    "PageView",
    "UserListController",
]
