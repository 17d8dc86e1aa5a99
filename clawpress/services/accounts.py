"""Accounts — registration and login.

Invariants:
    - Unique violation on username/email → DuplicateUserError (400), row count unchanged
    - Unknown user and wrong password produce the same InvalidCredentialsError
    - bcrypt runs in a worker thread, never on the event loop

Design Decisions:
    - Rely on the database unique constraints instead of a pre-check SELECT:
      concurrent registrations cannot both succeed
"""

import asyncio
import logging
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clawpress.config import Settings
from clawpress.core.errors import DuplicateUserError, InvalidCredentialsError
from clawpress.core.security import (
    hash_password, verify_password, create_access_token,
)
from clawpress.models.user import User
from clawpress.schemas.auth import (
    RegisterRequest, LoginRequest, AuthResponse, UserResponse,
)

logger = logging.getLogger(__name__)


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(
        user.id, user.username, user.is_admin,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(days=settings.jwt_expire_days),
    )


def _auth_response(user: User, settings: Settings) -> AuthResponse:
    return AuthResponse(
        token=issue_token(user, settings),
        user=UserResponse(
            id=user.id, username=user.username,
            email=user.email, is_admin=user.is_admin,
        ),
    )


async def register_user(
    body: RegisterRequest, db: AsyncSession, settings: Settings,
) -> AuthResponse:
    """Create a user and return a signed token for it."""
    password_hash = await asyncio.to_thread(
        hash_password, body.password, settings.bcrypt_rounds,
    )
    user = User(
        username=body.username,
        email=body.email,
        password_hash=password_hash,
        is_admin=False,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info(f"Registration rejected, duplicate user: {body.username}")
        raise DuplicateUserError()
    await db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})
    return _auth_response(user, settings)


async def login_user(
    body: LoginRequest, db: AsyncSession, settings: Settings,
) -> AuthResponse:
    result = await db.execute(
        select(User).where(User.username == body.username),
    )
    user = result.scalar_one_or_none()
    if not user:
        raise InvalidCredentialsError()
    valid = await asyncio.to_thread(
        verify_password, body.password, user.password_hash,
    )
    if not valid:
        raise InvalidCredentialsError()
    return _auth_response(user, settings)
