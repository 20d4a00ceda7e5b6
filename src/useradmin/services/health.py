from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from useradmin.models.user import User


async def count_users(session: AsyncSession) -> int | None:
    """Number of stored users, or ``None`` when the users table cannot be read.

    Readiness needs the table itself, not only a live connection: the page's
    list read is the first thing that would fail without it.
    """
    try:
        res = await session.execute(select(func.count()).select_from(User))
    except SQLAlchemyError:
        return None
    return res.scalar_one()
