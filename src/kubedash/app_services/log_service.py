"""Log application service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from starlette.websockets import WebSocket

from ..kube.kubectl import KubectlError
from ..util.log import Log

if TYPE_CHECKING:
    from ..runtime import AppContext

log = Log.create({"service": "logs"})

DEFAULT_LINES = 100
NO_LOGS = "No logs available"


class LogService:
    """Bounded log fetches and live log streams."""

    @classmethod
    async def recent(cls, app: AppContext, service: str, lines: int = DEFAULT_LINES) -> str:
        """Last ``lines`` lines for ``service``; a placeholder text when unavailable."""
        if lines < 1:
            raise ValueError("Field 'lines' must be a positive integer")
        try:
            result = await app.kubectl.run("logs", "-l", f"app={service}", f"--tail={lines}", merge_stderr=True)
        except KubectlError as e:
            log.warn("log fetch failed", {"service": service, "error": str(e)})
            return NO_LOGS
        return result.stdout

    @classmethod
    async def stream(cls, app: AppContext, service: str, websocket: WebSocket) -> None:
        """Follow ``service`` logs over an accepted websocket until either side ends."""
        await app.streams.open(service, websocket)

    @classmethod
    def sessions(cls, app: AppContext) -> list[dict[str, Any]]:
        """Live log streams currently open, oldest first."""
        return sorted(app.streams.list(), key=lambda info: info["started"])
