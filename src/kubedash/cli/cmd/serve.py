"""Serve command - run the dashboard web server."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Optional

from rich.console import Console

from ...core.config import DashboardConfig
from ...runtime import AppContext
from ...runtime.logging import bootstrap_logging
from ...server.server import Server
from ...util.log import Log

log = Log.create({"service": "cli.serve"})
console = Console()


async def _wait_forever() -> None:
    await asyncio.Future()


async def serve_web(
    ctx: AppContext,
    *,
    access_log: bool = True,
    wait: Callable[[], Awaitable[None]] | None = None,
) -> None:
    info = await Server.start(ctx, access_log=access_log)
    console.print(f"[green]kubedash[/green] running on {info.url}")
    console.print(f"Monitoring namespace: [bold]{ctx.config.namespace}[/bold]")

    block = wait or _wait_forever
    try:
        await block()
    finally:
        await Server.stop()


def serve_command(
    config: DashboardConfig,
    *,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    settings = bootstrap_logging(config, mode="web", level=log_level, format=log_format)
    ctx = AppContext(config)
    log.info("serve", {"host": config.host, "port": config.port, "namespace": config.namespace})
    try:
        asyncio.run(serve_web(ctx, access_log=settings.access_log))
    except KeyboardInterrupt:
        console.print("\nStopping kubedash...")
