"""Health and static front-end routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.responses import FileResponse, Response

from ...app_services.errors import NotFoundError
from ...runtime import AppContext
from ..deps import resolve_app_context
from ..schemas import HealthResponse
from ..webui import asset_path, index_response, static_root

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def health(ctx: AppContext = Depends(resolve_app_context)) -> HealthResponse:
    return HealthResponse(namespace=ctx.config.namespace, streams=ctx.streams.active())


@router.get("/", include_in_schema=False, response_model=None)
async def web_index(ctx: AppContext = Depends(resolve_app_context)) -> Response:
    return index_response(static_root(ctx.config.static_dir))


@router.get("/{path:path}", include_in_schema=False, response_model=None)
async def web_asset(path: str, ctx: AppContext = Depends(resolve_app_context)) -> Response:
    target = asset_path(static_root(ctx.config.static_dir), path)
    if target is None:
        raise NotFoundError("Static asset", path)
    return FileResponse(target)
