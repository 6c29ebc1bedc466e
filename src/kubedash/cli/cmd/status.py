"""Status command - one-shot snapshot in the terminal."""

from __future__ import annotations

import asyncio
import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...app_services import StatusService
from ...core.config import DashboardConfig
from ...runtime import AppContext
from ...runtime.logging import bootstrap_logging

console = Console()

STATUS_STYLE = {
    "Running": "green",
    "Pending": "yellow",
    "NotFound": "dim",
    "Error": "red",
}


def render_snapshot(snapshot: dict[str, Any]) -> Table:
    table = Table(title="Services")
    for column in ("Service", "Status", "Ready", "Uptime", "CPU", "Memory", "Pod", "URL"):
        table.add_column(column)

    urls = snapshot.get("urls", {})
    for name, item in snapshot["services"].items():
        state = item["status"]
        style = STATUS_STYLE.get(state, "yellow")
        ready = item.get("ready")
        table.add_row(
            name,
            f"[{style}]{state}[/{style}]" + (f" ({escape(item['error'])})" if item.get("error") else ""),
            "" if ready is None else ("yes" if ready else "no"),
            item.get("uptime", ""),
            item.get("cpu", ""),
            item.get("memory", ""),
            item.get("podName", ""),
            urls.get(name, ""),
        )
    return table


def status_command(config: DashboardConfig, *, json_output: bool = False) -> None:
    bootstrap_logging(config, mode="cli")
    ctx = AppContext(config)
    snapshot = asyncio.run(StatusService.snapshot(ctx))
    if json_output:
        console.print_json(json.dumps(snapshot))
        return
    console.print(render_snapshot(snapshot))
