"""Post ORM — published articles.

Invariants:
    - title and content are non-nullable text
    - author_name is the author's username at publish time (denormalized)
    - featured_image is nullable until resolved or backfilled

Design Decisions:
    - author_name denormalized: listing never joins users
    - No relationship() to likes/comments: counts are aggregated per query
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from clawpress.db.base import Base


class Post(Base):
    """Post entity — owned by its author."""
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    featured_image: Mapped[str | None] = mapped_column(
        String(2000), nullable=True,
    )
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    author_name: Mapped[str] = mapped_column(String(50), nullable=False)
    published_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
