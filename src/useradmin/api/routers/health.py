from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from useradmin.api import deps
from useradmin.services.health import count_users

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/liveness", summary="Process is up")
async def liveness():
    return {"status": "ok"}


@router.get("/readiness", summary="Users table is readable")
async def readiness(session: AsyncSession = Depends(deps.get_db)):
    users = await count_users(session)
    if users is None:
        return {"status": "degraded", "users": None}
    return {"status": "ready", "users": users}
