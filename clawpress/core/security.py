"""Credentials — bcrypt password hashing and JWT identity tokens.

Invariants:
    - Passwords are never stored or compared in plain text
    - bcrypt only reads the first 72 bytes; longer inputs are truncated the same
      way on hash and verify so both sides agree
    - decode_access_token() never raises: any invalid token maps to None (guest)

Design Decisions:
    - Pure functions, no settings import: callers pass secret/rounds explicitly
    - `sub` is the user id as a string (PyJWT validates sub as str)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from clawpress.core.domain_types import UserId

_BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a valid access token."""
    user_id: UserId
    username: str
    is_admin: bool


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with bcrypt. CPU-bound — run off the event loop."""
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(
            _password_bytes(password), password_hash.encode("utf-8"),
        )
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(
    user_id: int,
    username: str,
    is_admin: bool,
    secret: str,
    algorithm: str = "HS256",
    expires_in: timedelta = timedelta(days=7),
) -> str:
    """Sign a token for the given user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "username": username,
        "is_admin": bool(is_admin),
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str, secret: str, algorithm: str = "HS256",
) -> TokenClaims | None:
    """Verify signature and expiry. Returns None for any invalid token."""
    try:
        payload = jwt.decode(
            token, secret, algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
        return TokenClaims(
            user_id=UserId(int(payload["sub"])),
            username=str(payload.get("username", "")),
            is_admin=bool(payload.get("is_admin", False)),
        )
    except (jwt.PyJWTError, TypeError, ValueError):
        return None
