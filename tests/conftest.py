from collections.abc import Iterator
from pathlib import Path

import pytest

from kubedash.util.log import Log

# Bound before any test can monkeypatch Log.configure.
_configure = Log.configure


@pytest.fixture(autouse=True)
def _isolated_logging(monkeypatch, tmp_path: Path) -> Iterator[None]:  # type: ignore[no-untyped-def]
    monkeypatch.setenv("KUBEDASH_DATA_DIR", str(tmp_path / "data"))
    _configure(console=False, file=False)
    yield
    _configure(console=False, file=False)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
