"""Live log streaming sessions."""

from .stream import CLOSE_POLICY_VIOLATION, LiveLogSession, LogStreamManager

__all__ = ["CLOSE_POLICY_VIOLATION", "LiveLogSession", "LogStreamManager"]
