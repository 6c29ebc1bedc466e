"""CLI entry point for kubedash."""

from typing import Optional

import typer
from rich.console import Console

from .. import __version__
from ..core.config import ConfigError, DashboardConfig, load_config

app = typer.Typer(
    name="kubedash",
    help="kubedash - pod status, logs and restarts for a namespace",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"kubedash {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """kubedash - pod status, logs and restarts for a namespace."""


def _config(config_path: Optional[str], **overrides) -> DashboardConfig:
    try:
        return load_config(config_path, **overrides)
    except ConfigError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)


ConfigOption = typer.Option(None, "--config", "-c", help="Path to a JSON/JSONC config file")
NamespaceOption = typer.Option(None, "--namespace", "-n", help="Namespace to monitor")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
    namespace: Optional[str] = NamespaceOption,
    config: Optional[str] = ConfigOption,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="debug, info, warn or error"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="kv, json or pretty"),
):
    """Start the dashboard web server."""
    from .cmd.serve import serve_command

    cfg = _config(config, host=host, port=port, namespace=namespace)
    serve_command(cfg, log_level=log_level, log_format=log_format)


@app.command()
def status(
    namespace: Optional[str] = NamespaceOption,
    config: Optional[str] = ConfigOption,
    json_output: bool = typer.Option(False, "--json", help="Print the raw JSON snapshot"),
):
    """Print the status of every configured service."""
    from .cmd.status import status_command

    status_command(_config(config, namespace=namespace), json_output=json_output)


@app.command()
def logs(
    service: str = typer.Argument(..., help="Service name (app label)"),
    lines: int = typer.Option(100, "--lines", "-l", min=1, help="Number of lines"),
    namespace: Optional[str] = NamespaceOption,
    config: Optional[str] = ConfigOption,
):
    """Print recent log lines of a service."""
    from .cmd.actions import logs_command

    logs_command(_config(config, namespace=namespace), service, lines)


@app.command()
def restart(
    service: str = typer.Argument(..., help="Service name (app label)"),
    namespace: Optional[str] = NamespaceOption,
    config: Optional[str] = ConfigOption,
):
    """Trigger a rollout restart of a service."""
    from .cmd.actions import restart_command

    restart_command(_config(config, namespace=namespace), service)


if __name__ == "__main__":
    app()
