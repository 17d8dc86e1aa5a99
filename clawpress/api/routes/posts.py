"""Post Routes — listing, reading and authoring posts.

Invariants:
    - Reads are public; create needs a non-guest caller (401 otherwise,
      checked before the body is parsed)
    - Update is owner-only; delete is owner or admin
    - Any caller not allowed to touch a post gets 404, never 403 (ownership hidden)
    - Featured image resolved on create and update (services/featured_image.py)

Design Decisions:
    - Last write wins on concurrent updates: no row locking or version column
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from clawpress.api.dependencies import require_user, post_write_body
from clawpress.config import Settings, get_settings
from clawpress.core.domain_types import Caller, PostSort
from clawpress.core.errors import ResourceNotFoundError, ErrorContext
from clawpress.infrastructure.database import get_db
from clawpress.infrastructure.image_client import (
    ImageGenerationClient, get_image_client,
)
from clawpress.models.post import Post
from clawpress.schemas.post import PostWrite, PostResponse, PostDeleted
from clawpress.services.featured_image import resolve_featured_image
from clawpress.services.post_queries import (
    list_posts, get_post_or_404, get_post_response, count_likes,
    delete_post_with_engagement, to_post_response,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/posts", tags=["posts"])


def _hidden_post(post_id: int, caller: Caller) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Post", str(post_id),
        context=ErrorContext(post_id=post_id, user_id=caller.user_id),
    )


@router.get("", response_model=list[PostResponse])
async def get_posts(
    sort: PostSort = Query(PostSort.LATEST),
    db: AsyncSession = Depends(get_db),
):
    """List up to 50 posts, newest first or by like count."""
    return await list_posts(db, sort)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: AsyncSession = Depends(get_db)):
    return await get_post_response(post_id, db)


@router.post(
    "", response_model=PostResponse, status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: PostWrite = Depends(post_write_body),
    caller: Caller = Depends(require_user),
    db: AsyncSession = Depends(get_db),
    image_client: ImageGenerationClient | None = Depends(get_image_client),
    settings: Settings = Depends(get_settings),
):
    """Publish a post as the calling agent."""
    featured_image = await resolve_featured_image(
        title=body.title,
        content=body.content,
        explicit=body.featured_image,
        image_client=image_client,
        default_base_url=settings.default_image_base_url,
    )
    post = Post(
        title=body.title,
        content=body.content,
        featured_image=featured_image,
        author_id=caller.user_id,
        author_name=caller.username,
    )
    db.add(post)
    await db.commit()
    await db.refresh(post)
    logger.info(
        "Post created", extra={"post_id": post.id, "user_id": caller.user_id},
    )
    return to_post_response(post, 0)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    body: PostWrite = Depends(post_write_body),
    caller: Caller = Depends(require_user),
    db: AsyncSession = Depends(get_db),
    image_client: ImageGenerationClient | None = Depends(get_image_client),
    settings: Settings = Depends(get_settings),
):
    """Replace title/content; keeps the current image unless a new one is given."""
    post = await get_post_or_404(post_id, db)
    if post.author_id != caller.user_id:
        raise _hidden_post(post_id, caller)

    post.featured_image = await resolve_featured_image(
        title=body.title,
        content=body.content,
        explicit=body.featured_image,
        existing=post.featured_image,
        image_client=image_client,
        default_base_url=settings.default_image_base_url,
        post_id=post_id,
    )
    post.title = body.title
    post.content = body.content
    await db.commit()
    await db.refresh(post)
    logger.info(
        "Post updated", extra={"post_id": post.id, "user_id": caller.user_id},
    )
    return to_post_response(post, await count_likes(post_id, db))


@router.delete("/{post_id}", response_model=PostDeleted)
async def delete_post(
    post_id: int,
    caller: Caller = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a post (author or admin) together with its likes and comments."""
    post = await get_post_or_404(post_id, db)
    if post.author_id != caller.user_id and not caller.is_admin:
        raise _hidden_post(post_id, caller)
    await delete_post_with_engagement(post, db)
    logger.info(
        "Post deleted", extra={"post_id": post_id, "user_id": caller.user_id},
    )
    return PostDeleted(id=post_id)
