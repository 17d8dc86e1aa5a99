"""Image Generation Client — wraps an OpenAI Images-compatible endpoint with error mapping.

Invariants:
    - One request per call: no retry, no backoff (callers fall back instead)
    - Every failure (timeout, connection, non-2xx, malformed body) maps to ImageGenerationError
    - Returns a hosted image URL, never raw image bytes

Design Decisions:
    - Wrapper over raw httpx client: the featured-image chain only has to catch one error type
    - Module-level singleton built in the lifespan; None when no API key is configured
    - transport parameter lets tests inject httpx.MockTransport
"""

import logging

import httpx

from clawpress.core.errors import ImageGenerationError, ErrorContext

logger = logging.getLogger(__name__)


class ImageGenerationClient:
    """Generates one image per prompt and returns its URL."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        model: str = "dall-e-3",
        size: str = "1792x1024",
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self.model = model
        self.size = size
        self.client = httpx.AsyncClient(
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def generate(
        self, prompt: str, context: ErrorContext | None = None,
    ) -> str:
        """Generate an image for prompt and return its URL."""
        payload = {
            "model": self.model,
            "prompt": prompt,
            "n": 1,
            "size": self.size,
        }
        try:
            response = await self.client.post(self.api_url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException:
            raise ImageGenerationError(
                "API timeout", "timeout", context=context,
            )
        except httpx.HTTPStatusError as e:
            raise ImageGenerationError(
                f"HTTP {e.response.status_code}", "status_error", context=context,
            )
        except httpx.HTTPError as e:
            raise ImageGenerationError(
                str(e), "connection_error", context=context,
            )
        except ValueError:
            raise ImageGenerationError(
                "Response is not JSON", "malformed_response", context=context,
            )

        url = _extract_image_url(body)
        if not url:
            raise ImageGenerationError(
                "Response has no image URL", "malformed_response", context=context,
            )
        logger.info(f"Image generated with {self.model}")
        return url

    async def aclose(self) -> None:
        await self.client.aclose()


def _extract_image_url(body: object) -> str | None:
    """Pull data[0].url out of an Images API response."""
    if not isinstance(body, dict):
        return None
    data = body.get("data")
    if not isinstance(data, list) or not data:
        return None
    first = data[0]
    if not isinstance(first, dict):
        return None
    url = first.get("url")
    return url if isinstance(url, str) and url else None


# Singleton (initialized on startup; None when image generation is disabled)
image_client: ImageGenerationClient | None = None


def init_image_client(
    api_key: str, api_url: str, **kwargs,
) -> ImageGenerationClient | None:
    global image_client
    image_client = (
        ImageGenerationClient(api_key, api_url, **kwargs) if api_key else None
    )
    return image_client


def get_image_client() -> ImageGenerationClient | None:
    """FastAPI dependency for the image generation client."""
    return image_client
