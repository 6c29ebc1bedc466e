"""Runtime logging bootstrap helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from ..core.config import DashboardConfig
from ..util.log import Log, LogFormat, LogLevel

LogMode = Literal["cli", "web"]


@dataclass(frozen=True)
class LogSettings:
    level: LogLevel
    format: LogFormat
    console: bool
    file: bool
    access_log: bool


def resolve_logging(
    config: DashboardConfig,
    *,
    mode: LogMode,
    level: Optional[str] = None,
    format: Optional[str] = None,
    access_log: Optional[bool] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
) -> LogSettings:
    """Explicit arguments win over the config file, which wins over mode defaults."""
    cfg = config.logging
    web = mode == "web"

    def pick(explicit: Optional[bool], configured: Optional[bool], default: bool) -> bool:
        if explicit is not None:
            return explicit
        if configured is not None:
            return configured
        return default

    return LogSettings(
        level=LogLevel.parse(level or cfg.level),
        format=LogFormat.parse(format or cfg.format),
        console=pick(console, cfg.console, web),
        file=pick(file, cfg.file, True),
        access_log=pick(access_log, cfg.access_log, web),
    )


def bootstrap_logging(config: DashboardConfig, *, mode: LogMode, **overrides: Optional[object]) -> LogSettings:
    """Resolve logging settings and initialize the process logger."""
    settings = resolve_logging(config, mode=mode, **overrides)  # type: ignore[arg-type]
    Log.configure(
        level=settings.level,
        format=settings.format,
        console=settings.console,
        file=settings.file,
    )
    return settings
