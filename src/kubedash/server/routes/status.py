"""Service status transport routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ...app_services import StatusService
from ...runtime import AppContext
from ..deps import resolve_app_context
from ..schemas import StatusSnapshotResponse

router = APIRouter(prefix="/api", tags=["status"])


@router.get("/status", response_model=StatusSnapshotResponse, response_model_exclude_none=True, response_model_by_alias=True)
async def get_status(ctx: AppContext = Depends(resolve_app_context)) -> dict[str, Any]:
    return await StatusService.snapshot(ctx)
