"""kubectl access: command execution and pod status parsing."""

from .kubectl import CommandResult, Kubectl, KubectlError
from .pods import PodUsage, ServiceStatus, format_uptime, parse_top, query_service

__all__ = [
    "CommandResult",
    "Kubectl",
    "KubectlError",
    "PodUsage",
    "ServiceStatus",
    "format_uptime",
    "parse_top",
    "query_service",
]
