"""Structured, tagged logging with a console and a rotating file sink.

Loggers are created per component with a set of tags
(``Log.create({"service": "kube.kubectl"})``) that are attached to every
record. Records are rendered in one of three layouts:

``kv``
    ``2024-01-01T00:00:00+00:00 level=info msg="log stream opened" service=logs.stream id=ab12``
``json``
    one JSON object per line
``pretty``
    ``00:00:00 INFO  [logs.stream] log stream opened id=ab12``
"""

import json
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TextIO

from ..core.global_paths import GlobalPath

KEEP_LOG_FILES = 10
LOG_FILE_PREFIX = "kubedash-"


class LogLevel(str, Enum):
    """Log severity levels, lowest first."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def rank(self) -> int:
        return list(LogLevel).index(self)

    @classmethod
    def parse(cls, value: str | None) -> "LogLevel":
        if value is None:
            return cls.INFO
        name = value.strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"invalid log level: {value}") from None


class LogFormat(str, Enum):
    KV = "kv"
    JSON = "json"
    PRETTY = "pretty"

    @classmethod
    def parse(cls, value: str | None) -> "LogFormat":
        if value is None:
            return cls.KV
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"invalid log format: {value}") from None


def _plain(value: Any) -> Any:
    """Reduce ``value`` to something JSON can carry."""
    if isinstance(value, BaseException):
        text = str(value) or type(value).__name__
        if value.__cause__ is not None:
            text = f"{text} Caused by: {_plain(value.__cause__)}"
        return text
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_plain(v) for v in value]
    return str(value)


def _kv_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    text = str(value)
    if not text or '"' in text or "=" in text or any(ch.isspace() for ch in text):
        return json.dumps(text, ensure_ascii=False)
    return text


def _fields(record: Dict[str, Any], skip: tuple[str, ...]) -> str:
    return " ".join(f"{key}={_kv_value(value)}" for key, value in record.items() if key not in skip)


def _format_kv(record: Dict[str, Any]) -> str:
    head = f"{record['time']} level={record['level']} msg={_kv_value(record['msg'])}"
    rest = _fields(record, ("time", "level", "msg"))
    return f"{head} {rest}" if rest else head


def _format_json(record: Dict[str, Any]) -> str:
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def _format_pretty(record: Dict[str, Any]) -> str:
    clock = record["time"][11:19]
    level = record["level"].upper()
    service = record.get("service")
    tag = f"[{service}] " if service else ""
    rest = _fields(record, ("time", "level", "msg", "service"))
    line = f"{clock} {level:<5} {tag}{record['msg']}"
    return f"{line} {rest}" if rest else line


_FORMATTERS: Dict[LogFormat, Callable[[Dict[str, Any]], str]] = {
    LogFormat.KV: _format_kv,
    LogFormat.JSON: _format_json,
    LogFormat.PRETTY: _format_pretty,
}


@dataclass
class _Sinks:
    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.KV
    console: bool = False
    path: Optional[Path] = None
    handle: Optional[TextIO] = None

    def write(self, line: str) -> None:
        if self.console:
            sys.stderr.write(line)
            sys.stderr.flush()
        if self.handle is not None:
            self.handle.write(line)
            self.handle.flush()


_sinks = _Sinks()


class Logger:
    """Logger bound to a fixed set of tags."""

    def __init__(self, tags: Optional[Dict[str, Any]] = None):
        self.tags = dict(tags or {})

    def _log(self, level: LogLevel, message: Any, extra: Optional[Dict[str, Any]]) -> None:
        if level.rank < _sinks.level.rank:
            return
        record: Dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": level.value.lower(),
            "msg": "" if message is None else _plain(message),
        }
        for key, value in {**self.tags, **(extra or {})}.items():
            if value is not None:
                record[key] = _plain(value)
        _sinks.write(_FORMATTERS[_sinks.format](record) + "\n")

    def debug(self, message: Any = None, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(LogLevel.DEBUG, message, extra)

    def info(self, message: Any = None, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(LogLevel.INFO, message, extra)

    def warn(self, message: Any = None, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(LogLevel.WARN, message, extra)

    warning = warn

    def error(self, message: Any = None, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(LogLevel.ERROR, message, extra)


class Log:
    """Logger factory and process-wide sink configuration."""

    _loggers: Dict[str, Logger] = {}

    @classmethod
    def create(cls, tags: Optional[Dict[str, Any]] = None) -> Logger:
        """Logger for ``tags``; one shared instance per ``service`` tag."""
        service = (tags or {}).get("service")
        if not isinstance(service, str) or not service:
            return Logger(tags)
        return cls._loggers.setdefault(service, Logger(tags))

    @classmethod
    def configure(
        cls,
        *,
        level: LogLevel | None = None,
        format: LogFormat | None = None,
        console: bool | None = None,
        file: bool = True,
    ) -> None:
        """Set level, layout and sinks.

        With ``file`` enabled a new timestamped file is opened under
        ``GlobalPath.log()`` and older files beyond ``KEEP_LOG_FILES`` are
        removed.
        """
        if level is not None:
            _sinks.level = level
        if format is not None:
            _sinks.format = format
        if console is not None:
            _sinks.console = console

        cls.close()
        if not file:
            return

        log_dir = Path(GlobalPath.log())
        log_dir.mkdir(parents=True, exist_ok=True)
        cls._prune(log_dir, keep=KEEP_LOG_FILES - 1)
        stamp = datetime.now().strftime("%Y%m%dT%H%M%S")
        _sinks.path = log_dir / f"{LOG_FILE_PREFIX}{stamp}.log"
        _sinks.handle = _sinks.path.open("a", encoding="utf-8")

    @classmethod
    def _prune(cls, log_dir: Path, *, keep: int) -> None:
        files = sorted(log_dir.glob(f"{LOG_FILE_PREFIX}*.log"), key=lambda p: p.stat().st_mtime)
        for old in files[: max(0, len(files) - keep)]:
            old.unlink(missing_ok=True)

    @classmethod
    def file(cls) -> str:
        """Path of the current log file, empty when file logging is off."""
        return str(_sinks.path) if _sinks.path else ""

    @classmethod
    def close(cls) -> None:
        if _sinks.handle is not None:
            _sinks.handle.close()
        _sinks.handle = None
        _sinks.path = None
