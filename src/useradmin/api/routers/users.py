from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from useradmin.api import deps
from useradmin.core.config import get_settings
from useradmin.schemas.user import (
    UserCreateIn,
    UserEditIn,
    UsersPayload,
    CreatedUserPayload,
    EditedUserPayload,
    DeletedIdPayload,
)
from useradmin.services.user import (
    create_user,
    edit_user,
    delete_user,
    list_users,
    to_gql,
    DuplicateEmailError,
    InvalidRoleError,
    InvalidUserIdError,
    UserNotFoundError,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=UsersPayload, summary="List users",
            description="List at most `limit` users in creation order.")
async def list_users_route(
    limit: int | None = Query(default=None, ge=1, le=100),
    session: AsyncSession = Depends(deps.get_db),
):
    users = await list_users(session, limit or get_settings().users_page_size)
    return UsersPayload(users=[to_gql(u) for u in users])


@router.post("/", response_model=CreatedUserPayload, status_code=status.HTTP_201_CREATED,
             summary="Create a user",
             description="Create a new user. Email must be unique; roles are role names.")
async def create_user_route(payload: UserCreateIn, session: AsyncSession = Depends(deps.get_db)):
    try:
        user = await create_user(session, payload)
        await session.commit()
        return CreatedUserPayload(created_user=to_gql(user))
    except DuplicateEmailError:
        raise HTTPException(status_code=409, detail="Email already registered")
    except InvalidRoleError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.patch("/{user_id}", response_model=EditedUserPayload,
              summary="Edit a user",
              description="Update the fields present in the body. Roles are replaced only when sent.")
async def edit_user_route(user_id: str, payload: UserEditIn, session: AsyncSession = Depends(deps.get_db)):
    try:
        user = await edit_user(session, user_id, payload)
        await session.commit()
        return EditedUserPayload(edited_user=to_gql(user))
    except (InvalidUserIdError, InvalidRoleError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except DuplicateEmailError:
        raise HTTPException(status_code=409, detail="Email already registered")


@router.delete("/{user_id}", response_model=DeletedIdPayload)
async def delete_user_route(user_id: str, session: AsyncSession = Depends(deps.get_db)):
    try:
        deleted_id = await delete_user(session, user_id)
        await session.commit()
        return DeletedIdPayload(deleted_id=deleted_id)
    except InvalidUserIdError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
