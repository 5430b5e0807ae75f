"""Single-page app serving.

Registered last: unmatched /api/* paths get a JSON 404, everything else is a
file from the built frontend or, failing that, its index.html so client-side
routes resolve.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from releasenotes.observability.logging import get_logger

logger = get_logger(__name__)


def _resolve_asset(static_dir: Path, requested: str) -> Path | None:
    """File under static_dir for requested, or None (missing or escaping the dir)."""
    if not requested:
        return None
    candidate = (static_dir / requested).resolve()
    if static_dir.resolve() not in candidate.parents:
        return None
    return candidate if candidate.is_file() else None


def build_frontend_router(static_dir: Path) -> APIRouter:
    router = APIRouter(include_in_schema=False)
    index_file = static_dir / "index.html"

    if not index_file.is_file():
        logger.warning("Frontend build not found at %s; only API routes are served", static_dir)

    api_methods = ["GET", "POST", "PUT", "PATCH", "DELETE"]

    @router.api_route("/api", methods=api_methods)
    @router.api_route("/api/{path:path}", methods=api_methods)
    async def api_not_found(path: str = "") -> None:
        requested = f"/api/{path}" if path else "/api"
        raise HTTPException(status_code=404, detail=f"API route not found: {requested}")

    @router.get("/{full_path:path}")
    async def serve_frontend(full_path: str) -> FileResponse:
        asset = _resolve_asset(static_dir, full_path)
        if asset is not None:
            return FileResponse(asset)
        if index_file.is_file():
            return FileResponse(index_file)
        raise HTTPException(status_code=404, detail="Not found")

    return router
