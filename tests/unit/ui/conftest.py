import asyncio
import uuid

import pytest

from useradmin.core.auth import CurrentUser, SessionAuth
from useradmin.core.errors import ErrorInfo
from useradmin.core.result import Err, Ok
from useradmin.schemas.user import (
    CreatedUserPayload,
    DeletedIdPayload,
    EditedUserPayload,
    Roles,
    UserGQL,
    UsersPayload,
)
from useradmin.ui.controller import UserListController


class FakeUserAPI:
    """In-memory RemoteUserAPI.

    ``fail_next(op)`` makes the next call of ``op`` resolve to ``Err``;
    ``hold(op)`` returns an event the next call of ``op`` waits on before
    resolving. Responses are computed before waiting, like a reply already
    on the wire.
    """

    def __init__(self):
        self.users: dict[str, UserGQL] = {}
        self.calls: list[tuple] = []
        self._failures: dict[str, ErrorInfo] = {}
        self._gates: dict[str, asyncio.Event] = {}

    def seed(self, name, email, roles=(), image_uri=None, id=None) -> UserGQL:
        user = UserGQL(id=id or str(uuid.uuid4()), name=name, email=email, image_uri=image_uri, roles=list(roles))
        self.users[user.id] = user
        return user

    def fail_next(self, operation, message="boom", classification="network", status_code=None) -> ErrorInfo:
        error = ErrorInfo(message=message, classification=classification, operation=operation, status_code=status_code)
        self._failures[operation] = error
        return error

    def hold(self, operation) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[operation] = gate
        return gate

    def operations(self):
        return [c[0] for c in self.calls]

    async def _resolve(self, operation, compute):
        error = self._failures.pop(operation, None)
        result = Err(error) if error is not None else Ok(compute())
        gate = self._gates.pop(operation, None)
        if gate is not None:
            await gate.wait()
        return result

    async def list(self, limit):
        self.calls.append(("list", limit))
        return await self._resolve("list", lambda: UsersPayload(users=[*self.users.values()][:limit]))

    async def create(self, fields):
        self.calls.append(("create", fields))

        def compute():
            user = self.seed(fields.name, str(fields.email), fields.roles.names(), fields.image_uri)
            return CreatedUserPayload(created_user=user)
        return await self._resolve("create", compute)

    async def edit(self, id, fields):
        self.calls.append(("edit", id, fields))

        def compute():
            user = self.seed(fields.name, str(fields.email), fields.roles.names(), fields.image_uri, id=id)
            return EditedUserPayload(edited_user=user)
        return await self._resolve("edit", compute)

    async def delete(self, id):
        self.calls.append(("delete", id))

        def compute():
            self.users.pop(id)
            return DeletedIdPayload(deleted_id=id)
        return await self._resolve("delete", compute)


@pytest.fixture()
def fake_api():
    return FakeUserAPI()


@pytest.fixture()
def admin_auth():
    return SessionAuth(CurrentUser(id="op-1", name="Operator", roles=Roles(admin=True)))


@pytest.fixture()
def controller(fake_api, admin_auth, settings):
    return UserListController(fake_api, admin_auth, settings=settings)
