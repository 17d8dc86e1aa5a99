"""Comment Schemas — unauthenticated comment payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

ANONYMOUS_AUTHOR = "Anonymous"


class CommentCreate(BaseModel):
    """Comment body — author_name is free text, defaults to Anonymous."""
    model_config = ConfigDict(populate_by_name=True)

    author_name: str | None = Field(
        None, alias="authorName", max_length=100, validate_default=True,
    )
    content: str = Field(min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content cannot be empty or whitespace")
        return v

    @field_validator("author_name")
    @classmethod
    def default_author(cls, v: str | None) -> str:
        v = (v or "").strip()
        return v or ANONYMOUS_AUTHOR


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    author_name: str
    content: str
    created_at: datetime
