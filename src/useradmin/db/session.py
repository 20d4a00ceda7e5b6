"""Async engine and sessions for the user store behind the reference API."""
from typing import AsyncGenerator

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from useradmin.core.config import get_settings

# Constraint names match the ones Alembic emits in 0001_initial.
metadata = MetaData(naming_convention={
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
})


class Base(DeclarativeBase):
    metadata = metadata


def make_engine(url: str) -> AsyncEngine:
    return create_async_engine(url, echo=False, future=True)


engine = make_engine(get_settings().database_url_async)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def init_models(drop: bool = False) -> None:
    """Create the users table without Alembic (tests, local sqlite)."""
    import useradmin.models  # noqa: F401 register tables on Base.metadata

    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        else:
            await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:  # type: ignore
        yield session
