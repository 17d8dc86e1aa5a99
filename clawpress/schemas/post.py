"""Post Schemas — Pydantic models with field-level validation for post endpoints.

Invariants:
    - title 1-300 chars, content non-empty, both stripped
    - featured_image accepted as featuredImage (client JSON) or featured_image
    - blank featured_image normalized to None so the fallback chain runs

Design Decisions:
    - populate_by_name: both spellings accepted, responses always snake_case
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostWrite(BaseModel):
    """Create/update body — same fields for POST and PUT."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=100_000)
    featured_image: str | None = Field(
        None, alias="featuredImage", max_length=2000,
    )

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("featured_image")
    @classmethod
    def blank_image_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class PostResponse(BaseModel):
    """Post with its aggregated like count."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    featured_image: str | None = None
    author_id: int
    author_name: str
    published_at: datetime
    like_count: int = 0


class PostDeleted(BaseModel):
    id: int
    message: str = "Post deleted"


class LikeCount(BaseModel):
    post_id: int
    likes: int
