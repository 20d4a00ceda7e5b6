import pytest

from useradmin.core.errors import ErrorInfo, MutationInFlightError
from useradmin.core.result import Err, Ok
from useradmin.schemas.user import Roles, UserFields, UserRecord
from useradmin.ui.row import PLACEHOLDER_AVATAR, UserRow, avatar_uri, roles_label


def _user(**overrides):
    data = {"id": "1", "name": "Ann", "email": "a@x.com"}
    data.update(overrides)
    return UserRecord(**data)


class Recorder:
    def __init__(self, result=None, exc=None):
        self.calls = []
        self.result = result
        self.exc = exc

    async def __call__(self, *args):
        self.calls.append(args)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.mark.unit
def test_roles_label():
    assert roles_label(_user(roles=Roles(admin=True))) == "Admin"
    assert roles_label(_user(roles=Roles(admin=True, editor=True))) == "Admin, Editor"
    assert roles_label(_user()) == "None"


@pytest.mark.unit
def test_avatar_falls_back_to_placeholder():
    assert avatar_uri(_user()) == PLACEHOLDER_AVATAR
    assert avatar_uri(_user(image_uri="")) == PLACEHOLDER_AVATAR
    assert avatar_uri(_user(image_uri="http://img/ann.png")) == "http://img/ann.png"


@pytest.mark.unit
def test_modals_toggle_independently():
    row = UserRow(_user(), Recorder(), Recorder())
    row.open_edit()
    row.open_delete()
    assert row.edit_panel_open and row.delete_confirm_open
    row.close_edit()
    assert not row.edit_panel_open and row.delete_confirm_open
    row.close_delete()
    assert not row.delete_confirm_open


@pytest.mark.asyncio
@pytest.mark.unit
@pytest.mark.parametrize("result", [
    Ok("edited"),
    Err(ErrorInfo(message="boom", classification="network", operation="edit")),
])
async def test_submit_edit_closes_panel_either_way(result):
    edit = Recorder(result=result)
    row = UserRow(_user(), edit, Recorder())
    row.open_edit()
    fields = UserFields(name="Anna", email="anna@x.com")

    assert await row.submit_edit(fields) == result
    assert edit.calls == [("1", fields)]
    assert not row.edit_panel_open


@pytest.mark.asyncio
@pytest.mark.unit
async def test_submit_delete_passes_only_row_id():
    delete = Recorder(result=Ok("1"))
    row = UserRow(_user(), Recorder(), delete)
    row.open_delete()
    await row.submit_delete()
    assert delete.calls == [("1",)]
    assert not row.delete_confirm_open


@pytest.mark.asyncio
@pytest.mark.unit
async def test_refused_dispatch_keeps_modals_open():
    row = UserRow(
        _user(),
        Recorder(exc=MutationInFlightError("edit")),
        Recorder(exc=MutationInFlightError("delete")),
    )
    row.open_edit()
    row.open_delete()
    with pytest.raises(MutationInFlightError):
        await row.submit_edit(UserFields(name="Anna", email="anna@x.com"))
    with pytest.raises(MutationInFlightError):
        await row.submit_delete()
    assert row.edit_panel_open
    assert row.delete_confirm_open


@pytest.mark.unit
def test_view_binds_callbacks_and_flags():
    row = UserRow(_user(), Recorder(), Recorder())
    row.open_edit()
    view = row.view(editing=True, deleting=False)
    assert view.edit_form.show is True
    assert view.edit_form.init_user == row.user
    assert view.edit_form.editing_user is True
    assert view.delete_form.show is False
    assert view.delete_form.deleting_user is False
    view.edit_form.close()
    assert not row.edit_panel_open
    view.open_delete()
    assert row.delete_confirm_open
