"""Pydantic schemas for the FastAPI transport layer."""

from __future__ import annotations

from pydantic import BaseModel

from ..kube.pods import ServiceStatus


class ErrorResponse(BaseModel):
    error: str
    code: str | None = None
    details: dict[str, object] | list[object] | str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    namespace: str
    streams: int = 0


class StatusSnapshotResponse(BaseModel):
    services: dict[str, ServiceStatus]
    urls: dict[str, str]


class LogsResponse(BaseModel):
    logs: str


class LogStreamInfo(BaseModel):
    id: str
    service: str
    pid: int | None = None
    started: int


class LogStreamsResponse(BaseModel):
    streams: list[LogStreamInfo]


class RestartResponse(BaseModel):
    success: bool
    message: str
