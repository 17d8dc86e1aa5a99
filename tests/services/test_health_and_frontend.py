"""Health probes and static frontend fallback.

Invariants:
    - Liveness always 200; readiness 200 with a reachable database
    - Existing static files served as-is, unknown or unresolvable paths get index.html
    - Unknown /api paths get the JSON 404 envelope, never the SPA
"""

import pytest

from clawpress.config import Settings, get_settings
from clawpress.main import app


@pytest.fixture
def static_site(tmp_path):
    (tmp_path / "index.html").write_text("<html>ClawPress</html>")
    (tmp_path / "app.js").write_text("console.log('claw')")
    app.dependency_overrides[get_settings] = lambda: Settings(
        static_dir=str(tmp_path),
    )
    return tmp_path


async def test_liveness(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_root_serves_index(client, static_site):
    res = await client.get("/")
    assert res.status_code == 200
    assert "ClawPress" in res.text


async def test_existing_asset_is_served(client, static_site):
    res = await client.get("/app.js")
    assert res.status_code == 200
    assert "claw" in res.text


async def test_unknown_page_falls_back_to_index(client, static_site):
    res = await client.get("/posts/12/some-slug")
    assert res.status_code == 200
    assert "ClawPress" in res.text


async def test_unknown_api_path_is_json_404(client, static_site):
    res = await client.get("/api/nope")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_missing_index_returns_404(client, tmp_path):
    app.dependency_overrides[get_settings] = lambda: Settings(
        static_dir=str(tmp_path / "absent"),
    )
    res = await client.get("/about")
    assert res.status_code == 404


async def test_nul_byte_in_path_falls_back_to_index(client, static_site):
    res = await client.get("/foo%00bar")
    assert res.status_code == 200
    assert "ClawPress" in res.text


async def test_traversal_outside_static_dir_gets_index(client, static_site):
    (static_site.parent / "secret.txt").write_text("top secret")
    res = await client.get("/..%2Fsecret.txt")
    assert res.status_code == 200
    assert "top secret" not in res.text
