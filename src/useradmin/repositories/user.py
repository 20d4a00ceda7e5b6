import uuid
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
from useradmin.models.user import User

async def get_by_id(session: AsyncSession, id: uuid.UUID) -> Optional[User]:
    res = await session.execute(select(User).where(User.id == id))
    return res.scalar_one_or_none()

async def get_by_email(session: AsyncSession, email: str) -> Optional[User]:
    res = await session.execute(select(User).where(User.email == email).limit(1))
    return res.scalar_one_or_none()

async def create(session: AsyncSession, email: str, name: str = "", image_uri: Optional[str] = None,
                 admin: bool = False, editor: bool = False, id: Optional[uuid.UUID] = None) -> User:
    user = User(email=email, name=name, image_uri=image_uri, admin=admin, editor=editor)
    if id is not None:
        user.id = id
    session.add(user)
    await session.flush()
    return user

async def list_page(session: AsyncSession, limit: int) -> list[User]:
    res = await session.execute(select(User).order_by(User.created_at).limit(limit))
    return list(res.scalars().all())

async def delete(session: AsyncSession, user: User) -> None:
    await session.delete(user)
    await session.flush()
