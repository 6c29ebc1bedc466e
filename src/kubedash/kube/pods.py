"""Pod status queries for a single dashboard service."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from ..util.log import Log
from .kubectl import CommandResult, KubectlError

log = Log.create({"service": "kube.pods"})

NOT_AVAILABLE = "N/A"


class KubectlRunner(Protocol):
    async def run(self, *args: str, merge_stderr: bool = False) -> CommandResult: ...


@dataclass(frozen=True)
class PodUsage:
    cpu: str
    memory: str


class ServiceStatus(BaseModel):
    """Health of one service as reported to the dashboard.

    ``status`` is ``Running``, ``NotFound``, ``Error`` or the raw pod phase.
    Error records only carry ``error``; the other fields stay unset.
    """
    name: str
    status: str
    ready: Optional[bool] = None
    phase: Optional[str] = None
    uptime: Optional[str] = None
    cpu: Optional[str] = None
    memory: Optional[str] = None
    pod_name: Optional[str] = Field(None, alias="podName")
    error: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def not_found(cls, name: str) -> "ServiceStatus":
        return cls(name=name, status="NotFound", ready=False)

    @classmethod
    def failed(cls, name: str, error: BaseException | str) -> "ServiceStatus":
        message = str(error) or type(error).__name__
        return cls(name=name, status="Error", error=message)

    def wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def format_uptime(seconds: float) -> str:
    """Render elapsed seconds as the two largest units, e.g. ``1h 1m``."""
    if math.isnan(seconds) or seconds < 0:
        seconds = 0
    total = int(math.floor(seconds))
    minutes, secs = divmod(total, 60)
    hours, mins = divmod(minutes, 60)
    days, hrs = divmod(hours, 24)
    if days > 0:
        return f"{days}d {hrs}h"
    if hours > 0:
        return f"{hours}h {mins}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp as emitted by the API server."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def uptime_since(start_time: str | None, now: datetime | None = None) -> str:
    if not start_time:
        return NOT_AVAILABLE
    try:
        started = parse_timestamp(start_time)
    except ValueError:
        return NOT_AVAILABLE
    current = now or datetime.now(timezone.utc)
    return format_uptime((current - started).total_seconds())


def parse_top(text: str) -> PodUsage | None:
    """Pick CPU and memory out of ``kubectl top pod`` tabular output."""
    lines = text.splitlines()
    if len(lines) < 2:
        return None
    fields = lines[1].split()
    if len(fields) < 3:
        return None
    return PodUsage(cpu=fields[1], memory=fields[2])


def is_ready(pod: dict[str, Any]) -> bool:
    conditions = (pod.get("status") or {}).get("conditions") or []
    return any(
        isinstance(cond, dict) and cond.get("type") == "Ready" and cond.get("status") == "True"
        for cond in conditions
    )


def _start_key(pod: dict[str, Any]) -> float:
    start = (pod.get("status") or {}).get("startTime")
    if not start:
        return float("-inf")
    try:
        return parse_timestamp(start).timestamp()
    except ValueError:
        return float("-inf")


def select_pod(items: list[dict[str, Any]]) -> dict[str, Any]:
    """Newest pod by start time; pods without one rank oldest, ties keep CLI order."""
    return max(items, key=_start_key)


def pod_status(name: str, pod: dict[str, Any], usage: PodUsage | None, now: datetime | None = None) -> ServiceStatus:
    status = pod.get("status") or {}
    phase = str(status.get("phase") or "Unknown")
    ready = is_ready(pod)
    return ServiceStatus(
        name=name,
        status="Running" if ready and phase == "Running" else phase,
        ready=ready,
        phase=phase,
        uptime=uptime_since(status.get("startTime"), now),
        cpu=usage.cpu if usage else NOT_AVAILABLE,
        memory=usage.memory if usage else NOT_AVAILABLE,
        pod_name=(pod.get("metadata") or {}).get("name"),
    )


async def pod_usage(kubectl: KubectlRunner, pod_name: str | None) -> PodUsage | None:
    """Resource usage for one pod, or None when metrics are unavailable."""
    if not pod_name:
        return None
    try:
        result = await kubectl.run("top", "pod", pod_name)
    except KubectlError as e:
        log.debug("metrics unavailable", {"pod": pod_name, "error": str(e)})
        return None
    return parse_top(result.stdout)


async def query_service(kubectl: KubectlRunner, name: str) -> ServiceStatus:
    """Look up the pod backing service ``name`` and summarize its health."""
    try:
        result = await kubectl.run("get", "pods", "-l", f"app={name}", "-o", "json")
        listing = json.loads(result.stdout)
        if not isinstance(listing, dict):
            raise ValueError("pod listing is not a JSON object")
        items = [item for item in listing.get("items") or [] if isinstance(item, dict)]
    except (KubectlError, ValueError) as e:
        log.warn("service query failed", {"name": name, "error": str(e)})
        return ServiceStatus.failed(name, e)

    if not items:
        return ServiceStatus.not_found(name)

    pod = select_pod(items)
    usage = await pod_usage(kubectl, (pod.get("metadata") or {}).get("name"))
    return pod_status(name, pod, usage)
