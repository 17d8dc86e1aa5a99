"""Like ORM — append-only likes keyed by submitter IP.

Invariants:
    - No uniqueness on (post_id, ip_address): the same IP may like repeatedly
    - Rows are removed only together with their post
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from clawpress.db.base import Base


class Like(Base):
    """Like entity — one row per like click."""
    __tablename__ = "likes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id"), nullable=False, index=True,
    )
    ip_address: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
