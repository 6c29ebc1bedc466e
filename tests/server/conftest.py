from __future__ import annotations

import pytest

from kubedash.runtime import AppContext
from tests.helpers import FakeKubectl, make_ctx


@pytest.fixture
def kubectl() -> FakeKubectl:
    return FakeKubectl()


@pytest.fixture
def app_ctx(kubectl: FakeKubectl) -> AppContext:
    return make_ctx(kubectl)
