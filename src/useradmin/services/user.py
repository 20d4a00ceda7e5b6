"""User service layer behind the reference user API.

Wraps the `User` repository with the rules the admin screen relies on:
email uniqueness, role names restricted to ``ROLE_NAMES``, partial edits
that only touch the fields a caller sent, and ids validated before any
lookup. Failures are raised as domain exceptions which the router maps to
HTTP responses.
"""
from __future__ import annotations

import logging
import uuid
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from useradmin.core.errors import UserAdminError
from useradmin.schemas.user import ROLE_NAMES, UserCreateIn, UserEditIn, UserGQL
from useradmin.models.user import User
from useradmin.repositories import user as user_repo

__all__ = [
    "UserNotFoundError",
    "DuplicateEmailError",
    "InvalidRoleError",
    "InvalidUserIdError",
    "parse_user_id",
    "create_user",
    "get_user_or_404",
    "edit_user",
    "delete_user",
    "list_users",
    "to_gql",
]

logger = logging.getLogger(__name__)


class UserNotFoundError(UserAdminError):
    """Raised when a user id does not correspond to a stored record."""


class DuplicateEmailError(UserAdminError):
    """Raised when attempting to create/update a user with an existing email."""


class InvalidRoleError(UserAdminError):
    """Raised when a role name is not one of ``ROLE_NAMES``."""
    def __init__(self, role: str):
        self.role = role
        super().__init__(f"Unknown role: {role}")


class InvalidUserIdError(UserAdminError):
    def __init__(self, raw: str):
        self.raw = raw
        super().__init__("Not a valid UUID")


def parse_user_id(raw: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(raw))
    except (ValueError, AttributeError):
        raise InvalidUserIdError(raw) from None


def _role_flags(names: Iterable[str]) -> dict[str, bool]:
    wanted = set(names)
    for name in wanted:
        if name not in ROLE_NAMES:
            raise InvalidRoleError(name)
    return {name: name in wanted for name in ROLE_NAMES}


def to_gql(user: User) -> UserGQL:
    """Wire form of a stored user."""
    return UserGQL(
        id=str(user.id),
        name=user.name,
        email=user.email,
        image_uri=user.image_uri or None,
        roles=user.role_names,
    )


async def create_user(session: AsyncSession, data: UserCreateIn) -> User:
    flags = _role_flags(data.roles)
    if await user_repo.get_by_email(session, str(data.email)) is not None:
        raise DuplicateEmailError()
    user = await user_repo.create(
        session,
        email=str(data.email),
        name=data.name,
        image_uri=data.image_uri or None,
        **flags,
    )
    logger.info("users.created", extra={"user_id": str(user.id), "roles": user.role_names})
    return user


async def get_user_or_404(session: AsyncSession, user_id: uuid.UUID) -> User:
    user = await user_repo.get_by_id(session, user_id)
    if not user:
        raise UserNotFoundError()
    return user


async def edit_user(session: AsyncSession, raw_id: str, data: UserEditIn) -> User:
    user = await get_user_or_404(session, parse_user_id(raw_id))
    # Roles are only replaced when the caller sent a list.
    flags = _role_flags(data.roles) if data.roles is not None else {}
    if data.email is not None and str(data.email) != user.email:
        if await user_repo.get_by_email(session, str(data.email)) is not None:
            raise DuplicateEmailError()
        user.email = str(data.email)
    if data.name is not None:
        user.name = data.name
    if data.image_uri is not None:
        user.image_uri = data.image_uri or None
    for name, value in flags.items():
        setattr(user, name, value)
    await session.flush()
    logger.info(
        "users.edited",
        extra={"user_id": str(user.id), "roles_updated": data.roles is not None},
    )
    return user


async def delete_user(session: AsyncSession, raw_id: str) -> str:
    """Delete a user and return its id as the caller sent it."""
    user = await get_user_or_404(session, parse_user_id(raw_id))
    await user_repo.delete(session, user)
    logger.info("users.deleted", extra={"user_id": raw_id})
    return raw_id


async def list_users(session: AsyncSession, limit: int) -> list[User]:
    return await user_repo.list_page(session, limit)
