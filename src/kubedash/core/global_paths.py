"""Per-user directories for kubedash following XDG conventions."""

import os
from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "kubedash"


class GlobalPath:
    """Resolves the directories kubedash writes to."""

    @classmethod
    def data(cls) -> str:
        """Application data directory, overridable for tests."""
        return os.environ.get("KUBEDASH_DATA_DIR") or user_data_dir(APP_NAME)

    @classmethod
    def log(cls) -> str:
        """Log file directory."""
        return str(Path(cls.data()) / "log")
