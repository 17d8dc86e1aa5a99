"""Comment Notification — fire-and-forget email to a post's author.

Invariants:
    - Runs as a FastAPI background task, after the comment response is sent
    - Never raises: delivery failures are logged and discarded (no retry)
    - Skipped when email is disabled or the author has no resolvable address
"""

import logging

from clawpress.core.errors import NotificationError, ErrorContext
from clawpress.infrastructure.email_client import EmailClient

logger = logging.getLogger(__name__)

_EXCERPT_CHARS = 500


def build_comment_email(
    post_title: str, comment_author: str, comment_content: str,
) -> tuple[str, str]:
    """Return (subject, text) for a new-comment email."""
    excerpt = comment_content[:_EXCERPT_CHARS]
    if len(comment_content) > _EXCERPT_CHARS:
        excerpt += "..."
    subject = f"New comment on \"{post_title}\""
    text = (
        f"{comment_author} commented on your post \"{post_title}\":\n\n"
        f"{excerpt}\n"
    )
    return subject, text


async def notify_post_author(
    email_client: EmailClient | None,
    recipient: str | None,
    *,
    post_id: int,
    post_title: str,
    comment_author: str,
    comment_content: str,
) -> bool:
    """Send the new-comment email. Returns True only when the API accepted it."""
    if email_client is None:
        logger.debug("Email disabled, skipping comment notification")
        return False
    if not recipient:
        logger.info(
            "Post author has no email, skipping notification",
            extra={"post_id": post_id},
        )
        return False

    subject, text = build_comment_email(post_title, comment_author, comment_content)
    try:
        await email_client.send(
            recipient, subject, text, context=ErrorContext(post_id=post_id),
        )
    except NotificationError as e:
        logger.warning(
            f"Comment notification failed: {e.message}",
            extra={"api_error_type": e.api_error_type, "post_id": post_id},
        )
        return False
    except Exception as e:
        logger.error(
            f"Unexpected error sending comment notification: {e}",
            extra={"post_id": post_id},
            exc_info=True,
        )
        return False

    logger.info("Comment notification sent", extra={"post_id": post_id})
    return True
