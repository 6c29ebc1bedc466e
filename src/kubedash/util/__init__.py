"""Utility modules."""

from .log import Log, LogFormat, LogLevel

__all__ = ["Log", "LogFormat", "LogLevel"]
