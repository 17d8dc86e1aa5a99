"""Request Dependencies — caller identity, post bodies and client address.

Invariants:
    - get_caller never rejects: missing/invalid/expired tokens resolve to a guest
    - require_user: guest or unknown user id → 401; require_admin: non-admin → 403
    - post_write_body reads the body only after require_user has passed,
      so a guest always gets 401 whatever the body holds
    - client_ip prefers the first X-Forwarded-For hop (app runs behind a proxy)

Design Decisions:
    - HTTPBearer(auto_error=False): FastAPI parses the header, we decide the policy
    - Body decode/validation failures raised as RequestValidationError so they
      keep the VALIDATION_ERROR envelope
"""

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from clawpress.config import Settings, get_settings
from clawpress.core.domain_types import Caller
from clawpress.core.errors import (
    AuthenticationRequiredError, AdminRequiredError, ErrorContext,
)
from clawpress.core.security import decode_access_token
from clawpress.infrastructure.database import get_db
from clawpress.models.user import User
from clawpress.schemas.post import PostWrite

_bearer = HTTPBearer(auto_error=False)


async def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> Caller:
    """Optional auth — resolve the caller or fall back to a guest."""
    if credentials is None:
        return Caller.guest()
    claims = decode_access_token(
        credentials.credentials, settings.jwt_secret, settings.jwt_algorithm,
    )
    if claims is None:
        return Caller.guest()
    return Caller(
        user_id=claims.user_id,
        username=claims.username,
        is_admin=claims.is_admin,
    )


async def require_user(
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
) -> Caller:
    """Non-guest caller whose token still names an existing user."""
    if caller.is_guest:
        raise AuthenticationRequiredError()
    if await db.get(User, caller.user_id) is None:
        raise AuthenticationRequiredError(
            context=ErrorContext(user_id=caller.user_id),
        )
    return caller


async def require_admin(caller: Caller = Depends(require_user)) -> Caller:
    if not caller.is_admin:
        raise AdminRequiredError()
    return caller


async def post_write_body(
    request: Request, caller: Caller = Depends(require_user),
) -> PostWrite:
    """Parse a post create/update body once the caller is authenticated."""
    try:
        payload = await request.json()
    except ValueError:
        raise RequestValidationError([{
            "type": "json_invalid",
            "loc": ("body",),
            "msg": "JSON decode error",
            "input": {},
        }])
    try:
        return PostWrite.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError([
            {**err, "loc": ("body", *err["loc"])}
            for err in e.errors(include_url=False, include_context=False)
        ])


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client:
        return request.client.host
    return "unknown"
