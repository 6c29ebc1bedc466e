"""Live log streaming over WebSocket.

Each connection gets its own ``kubectl logs -f`` process. Output is relayed
chunk by chunk until either side goes away: a client disconnect terminates
the process, a process exit closes the connection.
"""

from __future__ import annotations

import asyncio
import codecs
import secrets
import time
from typing import Any

from starlette.websockets import WebSocket, WebSocketState

from ..kube.kubectl import Kubectl, KubectlError, terminate
from ..util.log import Log

log = Log.create({"service": "logs.stream"})

CHUNK_SIZE = 64 * 1024

# RFC 6455 close codes
CLOSE_NORMAL = 1000
CLOSE_POLICY_VIOLATION = 1008
CLOSE_INTERNAL_ERROR = 1011


def _reason(text: str) -> str:
    # Close reasons are limited to 123 bytes.
    return text.encode("utf-8")[:123].decode("utf-8", errors="ignore")


class LiveLogSession:
    """One follow process bound to one WebSocket."""

    def __init__(self, service: str, websocket: WebSocket) -> None:
        self.id = secrets.token_hex(6)
        self.service = service
        self.websocket = websocket
        self.process: asyncio.subprocess.Process | None = None
        self.started = time.time()

    def info(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "service": self.service,
            "pid": self.process.pid if self.process else None,
            "started": int(self.started * 1000),
        }

    async def run(self, kubectl: Kubectl) -> None:
        try:
            async with kubectl.follow("logs", "-l", f"app={self.service}", "-f") as proc:
                self.process = proc
                process_ended = await self._relay(proc)
        except KubectlError as e:
            log.warn("log stream failed to start", {"id": self.id, "service": self.service, "error": str(e)})
            await self.close(CLOSE_INTERNAL_ERROR, _reason(str(e)))
            return

        if process_ended:
            await self.close(CLOSE_NORMAL)

    async def _relay(self, proc: asyncio.subprocess.Process) -> bool:
        """Relay until one side ends; True when the process side ended cleanly."""
        pump = asyncio.create_task(self._pump(proc))
        watch = asyncio.create_task(self._watch())
        try:
            done, _ = await asyncio.wait({pump, watch}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (pump, watch):
                task.cancel()
            results = await asyncio.gather(pump, watch, return_exceptions=True)

        send_error = results[0]
        if isinstance(send_error, Exception):
            log.debug("log stream send failed", {"id": self.id, "error": send_error})
        return pump in done and watch not in done and send_error is None

    async def _pump(self, proc: asyncio.subprocess.Process) -> None:
        assert proc.stdout is not None
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            chunk = await proc.stdout.read(CHUNK_SIZE)
            text = decoder.decode(chunk, final=not chunk)
            if text:
                await self.websocket.send_text(text)
            if not chunk:
                return

    async def _watch(self) -> None:
        while True:
            message = await self.websocket.receive()
            if message["type"] == "websocket.disconnect":
                return

    async def close(self, code: int = CLOSE_NORMAL, reason: str | None = None) -> None:
        ws = self.websocket
        if ws.client_state != WebSocketState.CONNECTED or ws.application_state != WebSocketState.CONNECTED:
            return
        await ws.close(code=code, reason=reason)

    async def stop(self) -> None:
        """Terminate the follow process; the relay then closes the socket."""
        if self.process is not None:
            await terminate(self.process)


class LogStreamManager:
    """Registry of active live log sessions for one application."""

    def __init__(self, kubectl: Kubectl) -> None:
        self._kubectl = kubectl
        self._sessions: dict[str, LiveLogSession] = {}

    def active(self) -> int:
        return len(self._sessions)

    def list(self) -> list[dict[str, Any]]:
        return [session.info() for session in self._sessions.values()]

    async def open(self, service: str, websocket: WebSocket) -> None:
        """Run a session for ``websocket`` until it ends."""
        session = LiveLogSession(service, websocket)
        self._sessions[session.id] = session
        log.info("log stream opened", {"id": session.id, "service": service, "active": self.active()})
        try:
            await session.run(self._kubectl)
        finally:
            self._sessions.pop(session.id, None)
            log.info(
                "log stream closed",
                {
                    "id": session.id,
                    "service": service,
                    "duration_ms": int((time.time() - session.started) * 1000),
                    "active": self.active(),
                },
            )

    async def close_all(self) -> None:
        sessions = list(self._sessions.values())
        if not sessions:
            return
        log.info("stopping log streams", {"count": len(sessions)})
        await asyncio.gather(*(session.stop() for session in sessions), return_exceptions=True)
