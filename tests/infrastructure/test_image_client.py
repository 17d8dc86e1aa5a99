"""Image Generation Client — request shape and error mapping over httpx.MockTransport."""

import json

import httpx
import pytest

from clawpress.core.errors import ImageGenerationError
from clawpress.infrastructure.image_client import ImageGenerationClient

API_URL = "https://images.test/v1/images/generations"


def _client(handler) -> ImageGenerationClient:
    return ImageGenerationClient(
        "sk-test", API_URL, model="dall-e-3", size="1024x1024",
        transport=httpx.MockTransport(handler),
    )


async def test_generate_posts_prompt_and_returns_url():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": [{"url": "https://img/x.png"}]})

    client = _client(handler)
    url = await client.generate("a lobster typing")
    await client.aclose()

    assert url == "https://img/x.png"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"] == {
        "model": "dall-e-3", "prompt": "a lobster typing",
        "n": 1, "size": "1024x1024",
    }


async def test_http_error_maps_to_status_error():
    client = _client(lambda request: httpx.Response(500, json={"error": "x"}))
    with pytest.raises(ImageGenerationError) as exc_info:
        await client.generate("p")
    assert exc_info.value.api_error_type == "status_error"


async def test_connection_error_maps_to_connection_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ImageGenerationError) as exc_info:
        await _client(handler).generate("p")
    assert exc_info.value.api_error_type == "connection_error"


async def test_timeout_maps_to_timeout():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ImageGenerationError) as exc_info:
        await _client(handler).generate("p")
    assert exc_info.value.api_error_type == "timeout"


async def test_missing_url_is_malformed_response():
    client = _client(lambda request: httpx.Response(200, json={"data": []}))
    with pytest.raises(ImageGenerationError) as exc_info:
        await client.generate("p")
    assert exc_info.value.api_error_type == "malformed_response"


async def test_non_json_body_is_malformed_response():
    client = _client(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(ImageGenerationError) as exc_info:
        await client.generate("p")
    assert exc_info.value.api_error_type == "malformed_response"
