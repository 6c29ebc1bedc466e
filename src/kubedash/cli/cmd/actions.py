"""Logs and restart commands."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from ...app_services import LogService, RestartService
from ...core.config import DashboardConfig, is_label_value
from ...kube.kubectl import KubectlError
from ...runtime import AppContext
from ...runtime.logging import bootstrap_logging

console = Console()
err_console = Console(stderr=True)


def _check_service(service: str) -> None:
    if not is_label_value(service):
        err_console.print(f"[red]Invalid service name: {service!r}[/red]")
        raise typer.Exit(2)


def logs_command(config: DashboardConfig, service: str, lines: int) -> None:
    _check_service(service)
    bootstrap_logging(config, mode="cli")
    ctx = AppContext(config)
    text = asyncio.run(LogService.recent(ctx, service, lines))
    console.print(text, end="", markup=False, highlight=False, soft_wrap=True)


def restart_command(config: DashboardConfig, service: str) -> None:
    _check_service(service)
    bootstrap_logging(config, mode="cli")
    ctx = AppContext(config)
    try:
        result = asyncio.run(RestartService.restart(ctx, service))
    except KubectlError as e:
        err_console.print(f"[red]Restart failed:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]{result['message']}[/green]")
