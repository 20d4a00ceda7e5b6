import uuid
import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from useradmin.repositories import user as user_repo

@pytest.mark.asyncio
@pytest.mark.unit
async def test_user_create_and_get(db_session: AsyncSession):
    user_id = uuid.uuid4()
    created = await user_repo.create(db_session, email="unit_user@example.com", name="Unit", admin=True, id=user_id)
    assert created.id == user_id
    fetched = await user_repo.get_by_id(db_session, user_id)
    assert fetched is not None and fetched.email == "unit_user@example.com"
    assert fetched.role_names == ["admin"]

@pytest.mark.asyncio
@pytest.mark.unit
async def test_user_get_by_email(db_session: AsyncSession):
    await user_repo.create(db_session, email="by_email@example.com")
    assert await user_repo.get_by_email(db_session, "by_email@example.com") is not None
    assert await user_repo.get_by_email(db_session, "missing@example.com") is None

@pytest.mark.asyncio
@pytest.mark.unit
async def test_user_list_page_and_delete(db_session: AsyncSession):
    for e in ["a@u.com", "b@u.com", "c@u.com"]:
        await user_repo.create(db_session, email=e)
    assert len(await user_repo.list_page(db_session, 2)) == 2
    users = await user_repo.list_page(db_session, 10)
    await user_repo.delete(db_session, users[0])
    remaining = await user_repo.list_page(db_session, 10)
    assert users[0].id not in {u.id for u in remaining}
    assert len(remaining) == 2
