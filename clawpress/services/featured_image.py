"""Featured Image — ordered fallback chain for a post's thumbnail.

Invariants:
    - explicit > existing (update only) > AI-generated > keyword default > generic default
    - Image generation is best effort: ImageGenerationError is logged, never raised
    - Always returns a URL

Design Decisions:
    - Impureim sandwich: the only IO is the generator call; defaults come from
      core/default_images.py (pure)
    - No retry: one generation attempt per request, then the static default
    - Admin backfill uses keyword defaults only, so it never calls the generator
"""

import logging

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from clawpress.core.default_images import pick_default_image
from clawpress.core.errors import ImageGenerationError, ErrorContext
from clawpress.infrastructure.image_client import ImageGenerationClient
from clawpress.models.post import Post
from clawpress.schemas.image import FixedImage

logger = logging.getLogger(__name__)

_PROMPT_EXCERPT_CHARS = 300


def build_image_prompt(title: str, content: str) -> str:
    """Prompt for a blog header illustration (no text in the image)."""
    excerpt = " ".join(content.split())[:_PROMPT_EXCERPT_CHARS]
    return (
        f"A clean, modern editorial illustration for a blog post titled "
        f"\"{title}\". Topic summary: {excerpt}. "
        "No text, letters or logos in the image."
    )


async def resolve_featured_image(
    *,
    title: str,
    content: str,
    explicit: str | None,
    image_client: ImageGenerationClient | None,
    default_base_url: str,
    existing: str | None = None,
    post_id: int | None = None,
) -> str:
    """Pick the featured image URL for a created or updated post."""
    if explicit:
        return explicit
    if existing:
        return existing

    if image_client is not None:
        try:
            return await image_client.generate(
                build_image_prompt(title, content),
                context=ErrorContext(post_id=post_id),
            )
        except ImageGenerationError as e:
            logger.warning(
                f"Image generation failed, using default: {e.message}",
                extra={"api_error_type": e.api_error_type, "post_id": post_id},
            )

    return pick_default_image(title, content, default_base_url)


async def backfill_missing_images(
    db: AsyncSession, default_base_url: str,
) -> list[FixedImage]:
    """Give every post without an image its keyword default, then commit."""
    result = await db.execute(
        select(Post)
        .where(or_(Post.featured_image.is_(None), Post.featured_image == ""))
        .order_by(Post.id),
    )
    fixed = []
    for post in result.scalars().all():
        post.featured_image = pick_default_image(
            post.title, post.content, default_base_url,
        )
        fixed.append(FixedImage(id=post.id, featured_image=post.featured_image))
    if fixed:
        await db.commit()
    logger.info(f"Backfilled featured images for {len(fixed)} post(s)")
    return fixed
