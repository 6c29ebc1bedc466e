"""Log transport routes: bounded tail over HTTP, live tail over WebSocket."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, WebSocket

from ...app_services import LogService
from ...app_services.log_service import DEFAULT_LINES
from ...core.config import is_label_value
from ...logs import CLOSE_POLICY_VIOLATION
from ...runtime import AppContext
from ...util.log import Log
from ..deps import resolve_app_context, service_name
from ..schemas import LogsResponse, LogStreamsResponse

log = Log.create({"service": "server.logs"})

router = APIRouter(tags=["logs"])


@router.get("/api/logs/{service}", response_model=LogsResponse)
async def get_logs(
    service: str = Depends(service_name),
    lines: int = Query(default=DEFAULT_LINES, ge=1),
    ctx: AppContext = Depends(resolve_app_context),
) -> LogsResponse:
    return LogsResponse(logs=await LogService.recent(ctx, service, lines))


@router.get("/api/streams", response_model=LogStreamsResponse)
async def list_streams(ctx: AppContext = Depends(resolve_app_context)) -> dict[str, Any]:
    return {"streams": LogService.sessions(ctx)}


# Upgrades are accepted on any path; the service comes from the query string.
@router.websocket("/{path:path}")
async def live_logs(websocket: WebSocket, path: str, ctx: AppContext = Depends(resolve_app_context)) -> None:
    await websocket.accept()
    service = (websocket.query_params.get("service") or "").strip()
    if not service:
        await websocket.close(code=CLOSE_POLICY_VIOLATION, reason="Service parameter required")
        return
    if not is_label_value(service):
        log.warn("rejected log stream", {"service": service, "path": path})
        await websocket.close(code=CLOSE_POLICY_VIOLATION, reason="Invalid service parameter")
        return
    await LogService.stream(ctx, service, websocket)
