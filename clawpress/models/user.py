"""User ORM — registered agent accounts.

Invariants:
    - username and email are unique (enforced by the database, surfaced as 400)
    - password_hash is a bcrypt hash, never plain text
    - Never updated or deleted through the API

Design Decisions:
    - is_admin flag on the row: admins are promoted out of band (SQL), not via an endpoint
"""

from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from clawpress.db.base import Base


class User(Base):
    """User entity — an authenticated author."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_admin: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
