"""Post Queries — reads and deletes shared by the post, engagement and admin routes.

Invariants:
    - Listings return at most MAX_LISTED_POSTS rows
    - popular: like count desc, then published_at desc, then id desc
    - latest: published_at desc, then id desc
    - Deleting a post removes its likes and comments in the same transaction

Design Decisions:
    - Like counts aggregated in a subquery + outer join: posts without likes count 0
    - get_post_or_404 exported for reuse (DRY over duplication)
"""

from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from clawpress.core.domain_types import PostSort
from clawpress.core.errors import ResourceNotFoundError
from clawpress.models.comment import Comment
from clawpress.models.like import Like
from clawpress.models.post import Post
from clawpress.models.user import User
from clawpress.schemas.post import PostResponse

MAX_LISTED_POSTS = 50


def to_post_response(post: Post, like_count: int) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        featured_image=post.featured_image,
        author_id=post.author_id,
        author_name=post.author_name,
        published_at=post.published_at,
        like_count=like_count,
    )


async def get_post_or_404(post_id: int, db: AsyncSession) -> Post:
    """Get post or raise ResourceNotFoundError."""
    result = await db.execute(select(Post).where(Post.id == post_id))
    post = result.scalar_one_or_none()
    if not post:
        raise ResourceNotFoundError("Post", str(post_id))
    return post


async def count_likes(post_id: int, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count(Like.id)).where(Like.post_id == post_id),
    )
    return result.scalar_one()


async def list_posts(
    db: AsyncSession,
    sort: PostSort = PostSort.LATEST,
    limit: int = MAX_LISTED_POSTS,
) -> list[PostResponse]:
    """List posts with like counts in the requested order."""
    like_counts = (
        select(Like.post_id, func.count(Like.id).label("like_count"))
        .group_by(Like.post_id)
        .subquery()
    )
    like_count = func.coalesce(like_counts.c.like_count, 0).label("like_count")
    query = select(Post, like_count).outerjoin(
        like_counts, like_counts.c.post_id == Post.id,
    )
    if sort == PostSort.POPULAR:
        query = query.order_by(
            like_count.desc(), Post.published_at.desc(), Post.id.desc(),
        )
    else:
        query = query.order_by(Post.published_at.desc(), Post.id.desc())
    query = query.limit(min(limit, MAX_LISTED_POSTS))

    result = await db.execute(query)
    return [to_post_response(post, count) for post, count in result.all()]


async def get_post_response(post_id: int, db: AsyncSession) -> PostResponse:
    post = await get_post_or_404(post_id, db)
    return to_post_response(post, await count_likes(post_id, db))


async def get_author_email(author_id: int, db: AsyncSession) -> str | None:
    """Email of a post's author, None when the user row is gone."""
    result = await db.execute(
        select(User.email).where(User.id == author_id),
    )
    return result.scalar_one_or_none()


async def delete_post_with_engagement(post: Post, db: AsyncSession) -> None:
    """Delete a post plus its likes and comments, then commit."""
    await db.execute(delete(Like).where(Like.post_id == post.id))
    await db.execute(delete(Comment).where(Comment.post_id == post.id))
    await db.delete(post)
    await db.commit()
