import os
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator

# Configure database for tests via settings module rather than hardcoding directly.
# Allow overriding with TEST_DATABASE_URL; fall back to a local sqlite file.
test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///./tests/test.db")
os.environ.setdefault("DATABASE_URL", test_db_url)

from useradmin.core import config as _config  # noqa: E402
_config.get_settings.cache_clear()  # ensure new env vars are picked up # type: ignore[attr-defined]
_settings = _config.get_settings()

from useradmin.api.main import app  # noqa: E402
from useradmin.client.remote import HttpUserAPI  # noqa: E402
from useradmin.db.session import AsyncSessionLocal, init_models  # noqa: E402
from useradmin.models.user import User  # noqa: E402
from sqlalchemy import delete  # noqa: E402

@pytest_asyncio.fixture(autouse=True, scope="session")
async def prepare_db():
    await init_models()
    yield
    await init_models(drop=True)

@pytest.fixture(scope="session")
def settings():
    """Expose application settings to tests if needed."""
    return _settings

@pytest_asyncio.fixture()
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:  # type: ignore
        yield session

@pytest_asyncio.fixture()
async def client():
    # httpx >=0.28 removed the 'app=' shortcut; use ASGITransport explicitly
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

@pytest_asyncio.fixture()
async def user_api(client):
    """HttpUserAPI talking to the in-process reference API."""
    yield HttpUserAPI(base_url=f"http://test{_settings.api_prefix}", client=client)

@pytest_asyncio.fixture(autouse=True)
async def _clear_tables():
    """Ensure isolated tests by clearing the users table before each test."""
    async with AsyncSessionLocal() as session:  # type: ignore
        await session.execute(delete(User))
        await session.commit()
    yield
