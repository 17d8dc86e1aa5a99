"""Email Client — wraps a Resend-compatible email delivery API with error mapping.

Invariants:
    - One request per call: no retry, no delivery guarantee
    - Every failure maps to NotificationError (core/errors.py)

Design Decisions:
    - Same shape as ImageGenerationClient: singleton built in the lifespan,
      None when no API key is configured
"""

import logging

import httpx

from clawpress.core.errors import NotificationError, ErrorContext

logger = logging.getLogger(__name__)


class EmailClient:
    """Sends plain-text transactional email."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        sender: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self.sender = sender
        self.client = httpx.AsyncClient(
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def send(
        self,
        to: str,
        subject: str,
        text: str,
        context: ErrorContext | None = None,
    ) -> None:
        payload = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "text": text,
        }
        try:
            response = await self.client.post(self.api_url, json=payload)
            response.raise_for_status()
        except httpx.TimeoutException:
            raise NotificationError("API timeout", "timeout", context=context)
        except httpx.HTTPStatusError as e:
            raise NotificationError(
                f"HTTP {e.response.status_code}", "status_error", context=context,
            )
        except httpx.HTTPError as e:
            raise NotificationError(
                str(e), "connection_error", context=context,
            )

    async def aclose(self) -> None:
        await self.client.aclose()


# Singleton (initialized on startup; None when email delivery is disabled)
email_client: EmailClient | None = None


def init_email_client(
    api_key: str, api_url: str, sender: str, **kwargs,
) -> EmailClient | None:
    global email_client
    email_client = (
        EmailClient(api_key, api_url, sender, **kwargs) if api_key else None
    )
    return email_client


def get_email_client() -> EmailClient | None:
    """FastAPI dependency for the email client."""
    return email_client
