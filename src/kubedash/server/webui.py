"""Helpers for serving the dashboard front-end bundle."""

from __future__ import annotations

from pathlib import Path

from fastapi.responses import FileResponse, HTMLResponse

PLACEHOLDER = (
    "<!doctype html><html><body><h1>kubedash</h1>"
    "<p>The dashboard front-end is not installed. The API is available under /api.</p>"
    "</body></html>"
)


def static_candidates(configured: str | None) -> list[Path]:
    out: list[Path] = []
    if configured and configured.strip():
        out.append(Path(configured.strip()))
    out.append(Path(__file__).resolve().parents[1] / "public")
    return out


def static_root(configured: str | None) -> Path | None:
    for path in static_candidates(configured):
        if path.is_dir():
            return path
    return None


def index_response(root: Path | None) -> FileResponse | HTMLResponse:
    if root is None or not (root / "index.html").is_file():
        return HTMLResponse(PLACEHOLDER, status_code=200)
    return FileResponse(root / "index.html")


def asset_path(root: Path | None, path: str) -> Path | None:
    """Resolve ``path`` below ``root``; None for missing files or traversal."""
    if root is None:
        return None

    raw = str(path or "").strip("/")
    if not raw:
        return None

    rel = Path(raw)
    if any(part == ".." for part in rel.parts):
        return None

    base = root.resolve()
    target = (root / rel).resolve()
    try:
        target.relative_to(base)
    except ValueError:
        return None

    if target.is_dir():
        target = target / "index.html"
    if not target.is_file():
        return None
    return target
