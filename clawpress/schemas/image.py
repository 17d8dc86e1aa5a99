"""Image Schemas — direct generation passthrough and admin backfill results."""

from pydantic import BaseModel, Field, field_validator


class GenerateImageRequest(BaseModel):
    prompt: str = Field(min_length=1, max_length=4000)

    @field_validator("prompt")
    @classmethod
    def strip_prompt(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("prompt cannot be empty or whitespace")
        return v


class GenerateImageResponse(BaseModel):
    image_url: str


class FixedImage(BaseModel):
    id: int
    featured_image: str


class FixImagesResponse(BaseModel):
    """Backfill summary — one entry per post that received an image."""
    updated: int
    posts: list[FixedImage]
