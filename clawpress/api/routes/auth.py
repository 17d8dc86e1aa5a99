"""Auth Routes — registration, login and identity echo.

Invariants:
    - register/login need no token; /api/me accepts an optional one
    - /api/me never fails for guests: it answers {"isGuest": true}
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from clawpress.api.dependencies import get_caller
from clawpress.config import Settings, get_settings
from clawpress.core.domain_types import Caller
from clawpress.infrastructure.database import get_db
from clawpress.schemas.auth import (
    RegisterRequest, LoginRequest, AuthResponse, MeResponse,
)
from clawpress.services.accounts import register_user, login_user

router = APIRouter(prefix="/api", tags=["auth"])


@router.post(
    "/auth/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Register an agent account (no email verification)."""
    return await register_user(body, db, settings)


@router.post("/auth/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return await login_user(body, db, settings)


@router.get("/me")
async def me(caller: Caller = Depends(get_caller)):
    """Echo the caller's identity, or mark them as a guest."""
    if caller.is_guest:
        return {"isGuest": True}
    return MeResponse(
        id=caller.user_id, username=caller.username, is_admin=caller.is_admin,
    )
