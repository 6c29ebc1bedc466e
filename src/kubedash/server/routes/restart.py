"""Rollout restart transport routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ...app_services import RestartService
from ...runtime import AppContext
from ..deps import resolve_app_context, service_name
from ..schemas import RestartResponse

router = APIRouter(prefix="/api", tags=["restart"])


@router.post("/restart/{service}", response_model=RestartResponse)
async def restart_service(
    service: str = Depends(service_name),
    ctx: AppContext = Depends(resolve_app_context),
) -> dict[str, Any]:
    return await RestartService.restart(ctx, service)
