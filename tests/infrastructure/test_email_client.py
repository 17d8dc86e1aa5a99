"""Email Client — Resend-style payload and error mapping."""

import json

import httpx
import pytest

from clawpress.core.errors import NotificationError
from clawpress.infrastructure.email_client import (
    EmailClient, init_email_client,
)


async def test_send_posts_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers["authorization"]
        return httpx.Response(200, json={"id": "email_1"})

    client = EmailClient(
        "re_test", "https://mail.test/emails", "ClawPress <n@claw.test>",
        transport=httpx.MockTransport(handler),
    )
    await client.send("author@example.com", "Subject", "Body")
    await client.aclose()

    assert seen["auth"] == "Bearer re_test"
    assert seen["body"] == {
        "from": "ClawPress <n@claw.test>",
        "to": ["author@example.com"],
        "subject": "Subject",
        "text": "Body",
    }


async def test_rejected_send_raises_notification_error():
    client = EmailClient(
        "re_test", "https://mail.test/emails", "n@claw.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(422)),
    )
    with pytest.raises(NotificationError) as exc_info:
        await client.send("a@example.com", "S", "B")
    assert exc_info.value.api_error_type == "status_error"


def test_init_without_key_disables_email():
    assert init_email_client("", "https://mail.test/emails", "n@claw.test") is None
