from datetime import datetime, timezone

import pytest

from kubedash.kube.pods import format_uptime, uptime_since


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "0s"),
        (45, "45s"),
        (59.9, "59s"),
        (60, "1m 0s"),
        (90, "1m 30s"),
        (3600, "1h 0m"),
        (3661, "1h 1m"),
        (86399, "23h 59m"),
        (86400, "1d 0h"),
        (90000, "1d 1h"),
        (10 * 86400 + 5 * 3600 + 59, "10d 5h"),
    ],
)
def test_format_uptime_uses_two_largest_units(seconds: float, expected: str) -> None:
    assert format_uptime(seconds) == expected


def test_format_uptime_clamps_negative_elapsed_time() -> None:
    assert format_uptime(-30) == "0s"
    assert format_uptime(float("nan")) == "0s"


def test_uptime_since_measures_from_start_time() -> None:
    now = datetime(2024, 1, 2, 1, 0, 0, tzinfo=timezone.utc)
    assert uptime_since("2024-01-01T00:00:00Z", now) == "1d 1h"
    assert uptime_since("2024-01-02T00:59:15+00:00", now) == "45s"


def test_uptime_since_start_in_future_is_zero() -> None:
    now = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
    assert uptime_since("2024-01-01T00:05:00Z", now) == "0s"


def test_uptime_since_without_start_time_is_not_available() -> None:
    assert uptime_since(None) == "N/A"
    assert uptime_since("") == "N/A"
    assert uptime_since("yesterday") == "N/A"
