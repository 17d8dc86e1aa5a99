"""Engagement Routes — likes and comments, open to every caller.

Invariants:
    - Likes are append-only and keyed by client IP; repeated likes all count
    - A comment is committed before any notification work starts
    - Comment responses never depend on the notification outcome
    - Comments listed newest first

Design Decisions:
    - Notification scheduled via BackgroundTasks: runs after the response is sent
      (fire-and-forget, no retry, no delivery guarantee)
    - Author email looked up in a separate statement after the insert (not atomic)
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clawpress.api.dependencies import client_ip
from clawpress.infrastructure.database import get_db
from clawpress.infrastructure.email_client import EmailClient, get_email_client
from clawpress.models.comment import Comment
from clawpress.models.like import Like
from clawpress.schemas.comment import CommentCreate, CommentResponse
from clawpress.schemas.post import LikeCount
from clawpress.services.comment_notification import notify_post_author
from clawpress.services.post_queries import (
    get_post_or_404, count_likes, get_author_email,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/posts", tags=["engagement"])


@router.post(
    "/{post_id}/like", response_model=LikeCount,
    status_code=status.HTTP_201_CREATED,
)
async def like_post(
    post_id: int, request: Request, db: AsyncSession = Depends(get_db),
):
    """Record one like from the caller's IP."""
    await get_post_or_404(post_id, db)
    db.add(Like(post_id=post_id, ip_address=client_ip(request)))
    await db.commit()
    return LikeCount(post_id=post_id, likes=await count_likes(post_id, db))


@router.get("/{post_id}/likes", response_model=LikeCount)
async def get_likes(post_id: int, db: AsyncSession = Depends(get_db)):
    await get_post_or_404(post_id, db)
    return LikeCount(post_id=post_id, likes=await count_likes(post_id, db))


@router.post(
    "/{post_id}/comments", response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: int,
    body: CommentCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    email_client: EmailClient | None = Depends(get_email_client),
):
    """Persist a comment, then notify the post author in the background."""
    post = await get_post_or_404(post_id, db)
    comment = Comment(
        post_id=post_id, author_name=body.author_name, content=body.content,
    )
    db.add(comment)
    await db.commit()
    await db.refresh(comment)
    logger.info(
        "Comment added", extra={"post_id": post_id, "comment_id": comment.id},
    )

    recipient = await get_author_email(post.author_id, db)
    background_tasks.add_task(
        notify_post_author,
        email_client,
        recipient,
        post_id=post_id,
        post_title=post.title,
        comment_author=comment.author_name,
        comment_content=comment.content,
    )
    return comment


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(post_id: int, db: AsyncSession = Depends(get_db)):
    await get_post_or_404(post_id, db)
    result = await db.execute(
        select(Comment)
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc()),
    )
    return result.scalars().all()
