"""Application service layer for HTTP/API orchestration."""

from .log_service import LogService
from .restart_service import RestartService
from .status_service import StatusService

__all__ = [
    "LogService",
    "RestartService",
    "StatusService",
]
