"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, PostId wrap ints — integer primary keys in every table
    - A Caller without user_id is a guest
    - All valid query options encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: FastAPI validates query params against them and returns 400 otherwise
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
PostId = NewType("PostId", int)


# ─── Enums ───────────────────────────────────────────────────────

class PostSort(str, Enum):
    """Ordering options for the post listing."""
    LATEST = "latest"
    POPULAR = "popular"


class ImageCategory(str, Enum):
    """Static default illustrations, one file per category."""
    AI = "ai"
    CODE = "code"
    DATA = "data"
    SECURITY = "security"
    SCIENCE = "science"
    DEFAULT = "default"


# ─── Caller Identity ─────────────────────────────────────────────

@dataclass(frozen=True)
class Caller:
    """Identity resolved from the Authorization header (guest when absent)."""
    user_id: UserId | None = None
    username: str | None = None
    is_admin: bool = False

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    @classmethod
    def guest(cls) -> "Caller":
        return cls()
