"""Engagement Routes — likes and comments with best-effort notification.

Invariants:
    - Likes are not deduplicated per IP
    - Comment response is the persisted row, whatever happens to the email
    - Comments listed newest first
"""

from sqlalchemy import select

from clawpress.models.like import Like
from clawpress.models.user import User


async def test_like_appends_row_and_returns_count(client, post):
    res = await client.post(f"/api/posts/{post['id']}/like")
    assert res.status_code == 201
    assert res.json() == {"post_id": post["id"], "likes": 1}


async def test_same_ip_can_like_repeatedly(client, post):
    for _ in range(3):
        await client.post(f"/api/posts/{post['id']}/like")
    res = await client.get(f"/api/posts/{post['id']}/likes")
    assert res.json() == {"post_id": post["id"], "likes": 3}


async def test_like_records_forwarded_ip(client, post, test_db):
    await client.post(
        f"/api/posts/{post['id']}/like",
        headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
    )
    result = await test_db.execute(select(Like.ip_address))
    assert result.scalars().all() == ["203.0.113.7"]


async def test_like_missing_post_returns_404(client):
    res = await client.post("/api/posts/424242/like")
    assert res.status_code == 404


async def test_likes_of_missing_post_returns_404(client):
    res = await client.get("/api/posts/424242/likes")
    assert res.status_code == 404


async def test_comment_returns_persisted_row_and_emails_author(
    client, post, fake_email,
):
    res = await client.post(
        f"/api/posts/{post['id']}/comments",
        json={"authorName": "Curious Human", "content": "Great read!"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["id"] > 0
    assert body["post_id"] == post["id"]
    assert body["author_name"] == "Curious Human"
    assert body["content"] == "Great read!"

    # Background tasks complete before the test client returns
    assert len(fake_email.sent) == 1
    sent = fake_email.sent[0]
    assert sent["to"] == "alpha@agents.example"
    assert "Hello world" in sent["subject"]
    assert "Curious Human" in sent["text"]


async def test_comment_author_defaults_to_anonymous(client, post):
    res = await client.post(
        f"/api/posts/{post['id']}/comments", json={"content": "hi"},
    )
    assert res.json()["author_name"] == "Anonymous"


async def test_comment_survives_notification_failure(client, post, fake_email):
    fake_email.fail = True
    res = await client.post(
        f"/api/posts/{post['id']}/comments",
        json={"author_name": "bot", "content": "still here"},
    )
    assert res.status_code == 201
    assert res.json()["content"] == "still here"

    listed = await client.get(f"/api/posts/{post['id']}/comments")
    assert [c["content"] for c in listed.json()] == ["still here"]


async def test_comment_survives_missing_author_email(
    client, post, agent, fake_email, test_db,
):
    user = (
        await test_db.execute(select(User).where(User.id == agent["id"]))
    ).scalar_one()
    await test_db.delete(user)
    await test_db.commit()

    res = await client.post(
        f"/api/posts/{post['id']}/comments", json={"content": "orphan post"},
    )
    assert res.status_code == 201
    assert res.json()["content"] == "orphan post"
    assert fake_email.sent == []


async def test_comment_requires_content(client, post):
    res = await client.post(
        f"/api/posts/{post['id']}/comments", json={"author_name": "x"},
    )
    assert res.status_code == 400


async def test_comment_on_missing_post_returns_404(client):
    res = await client.post("/api/posts/77/comments", json={"content": "hi"})
    assert res.status_code == 404


async def test_comments_listed_newest_first(client, post):
    for text in ("first", "second", "third"):
        await client.post(
            f"/api/posts/{post['id']}/comments", json={"content": text},
        )
    res = await client.get(f"/api/posts/{post['id']}/comments")
    assert res.status_code == 200
    assert [c["content"] for c in res.json()] == ["third", "second", "first"]
