"""In-process uvicorn server for the dashboard."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Optional

import uvicorn

from ..runtime import AppContext
from ..util.log import Log
from .app import create_app

log = Log.create({"service": "server"})


@dataclass
class ServerInfo:
    """Address of a running server."""
    host: str
    port: int

    @property
    def url(self) -> str:
        host = "localhost" if self.host in {"0.0.0.0", "::"} else self.host
        return f"http://{host}:{self.port}"


class Server:
    """Runs the dashboard API on uvicorn inside the current event loop."""

    _server: Optional[uvicorn.Server] = None
    _task: Optional["asyncio.Task[Any]"] = None
    _info: Optional[ServerInfo] = None

    @classmethod
    async def start(
        cls,
        ctx: AppContext,
        *,
        host: str | None = None,
        port: int | None = None,
        access_log: bool = True,
    ) -> ServerInfo:
        """Start serving and return once uvicorn reports it is listening."""
        if cls._server is not None:
            raise RuntimeError("server already running")

        host = host or ctx.config.host
        port = port or ctx.config.port
        app = create_app(ctx, access_log=access_log)
        config = uvicorn.Config(app, host=host, port=port, log_level="warning", access_log=False)
        server = uvicorn.Server(config)

        log.info("starting server", {"host": host, "port": port})
        task = asyncio.create_task(server.serve())
        while not server.started:
            if task.done():
                # serve() returns early (or raises) when the port cannot be bound.
                task.result()
                raise RuntimeError(f"server failed to start on {host}:{port}")
            await asyncio.sleep(0.05)

        cls._server, cls._task = server, task
        cls._info = ServerInfo(host=host, port=port)
        log.info("server started", {"url": cls._info.url})
        return cls._info

    @classmethod
    async def stop(cls) -> None:
        if cls._server is None:
            return
        log.info("stopping server")
        cls._server.should_exit = True
        if cls._task is not None:
            await cls._task
        cls._server = None
        cls._task = None
        cls._info = None
        log.info("server stopped")

    @classmethod
    def info(cls) -> Optional[ServerInfo]:
        return cls._info
