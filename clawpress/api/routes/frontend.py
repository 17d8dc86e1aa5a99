"""Frontend Fallback — serves the static single-page app for any unmatched GET.

Invariants:
    - Existing files under static_dir are served as-is
    - Any other path gets index.html (client-side routing)
    - Unknown /api/... paths return the JSON 404 envelope, never HTML
    - Paths resolving outside static_dir, or that cannot be resolved at all
      (embedded NUL), are never served and fall through to index.html

Design Decisions:
    - Catch-all route instead of StaticFiles(html=True): StaticFiles 404s unknown
      paths, the SPA needs index.html for them
"""

from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from clawpress.config import Settings, get_settings
from clawpress.core.errors import ResourceNotFoundError

router = APIRouter(tags=["frontend"])


def _resolve_static_file(static_dir: Path, requested: str) -> Path | None:
    """Return the file for requested if it exists inside static_dir."""
    if not requested:
        return None
    try:
        candidate = (static_dir / requested).resolve()
        if not candidate.is_relative_to(static_dir) or not candidate.is_file():
            return None
    except (ValueError, OSError):
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(
    full_path: str, settings: Settings = Depends(get_settings),
):
    if full_path == "api" or full_path.startswith("api/"):
        raise ResourceNotFoundError("Route", f"/{full_path}")

    static_dir = Path(settings.static_dir).resolve()
    file_path = _resolve_static_file(static_dir, full_path)
    if file_path is not None:
        return FileResponse(file_path)

    index = static_dir / "index.html"
    if not index.is_file():
        raise ResourceNotFoundError("Page", f"/{full_path}")
    return FileResponse(index)
