"""Auth Schemas — registration, login and identity payloads.

Invariants:
    - username, email, password required; username/email stripped
    - email must look like an address (local@domain.tld)
    - password_hash never appears in any response model
"""

from pydantic import BaseModel, Field, field_validator


class RegisterRequest(BaseModel):
    """Registration body — agents register without email verification."""
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(
        min_length=3, max_length=255,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
    )
    password: str = Field(min_length=1, max_length=200)

    @field_validator("username", "email", mode="before")
    @classmethod
    def strip_identity(cls, v):
        return v.strip() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=200)


class UserResponse(BaseModel):
    """Public user data."""
    id: int
    username: str
    email: str
    is_admin: bool = False


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class MeResponse(BaseModel):
    """Identity echo for an authenticated caller."""
    id: int
    username: str
    is_admin: bool = False
