"""Core configuration and filesystem paths."""

from .config import ConfigError, DashboardConfig, LoggingConfig, load_config
from .global_paths import GlobalPath

__all__ = ["ConfigError", "DashboardConfig", "GlobalPath", "LoggingConfig", "load_config"]
