"""FastAPI dependencies shared across transport handlers."""

from __future__ import annotations

from starlette.requests import HTTPConnection

from ..core.config import validate_service_name
from ..runtime import AppContext


def resolve_app_context(conn: HTTPConnection) -> AppContext:
    ctx = getattr(conn.app.state, "ctx", None)
    if not isinstance(ctx, AppContext):
        raise RuntimeError("Application context is not initialized")
    return ctx


def service_name(service: str) -> str:
    """Path parameter ``service`` restricted to valid label values."""
    return validate_service_name(service)
