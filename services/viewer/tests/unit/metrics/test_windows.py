from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError
from src.metrics.windows import resolve_window

from shared.constants import RangeToken

NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "token,expected",
    [
        ("5m", timedelta(minutes=5)),
        ("15m", timedelta(minutes=15)),
        ("30m", timedelta(minutes=30)),
        ("1h", timedelta(hours=1)),
        ("6h", timedelta(hours=6)),
        ("24h", timedelta(hours=24)),
        ("7d", timedelta(days=7)),
    ],
)
def test_lower_bound_per_token(token, expected):
    window = resolve_window(token, NOW)
    assert window.token == RangeToken(token)
    assert window.lower_bound == NOW - expected


def test_same_inputs_same_window():
    assert resolve_window("6h", NOW) == resolve_window("6h", NOW)


@pytest.mark.parametrize("token", ["2h", "", None, "bogus"])
def test_unknown_token_defaults_to_five_minutes(token):
    window = resolve_window(token, NOW)
    assert window.lower_bound == NOW - timedelta(minutes=5)
    assert window.token == RangeToken.FIVE_MINUTES


def test_accepts_enum_member():
    window = resolve_window(RangeToken.SEVEN_DAYS, NOW)
    assert window.lower_bound == NOW - timedelta(days=7)


def test_window_is_immutable():
    window = resolve_window("1h", NOW)
    with pytest.raises(ValidationError):
        window.lower_bound = NOW  # type: ignore[misc]


def test_token_lookup_is_case_and_space_tolerant():
    assert resolve_window(" 1H", NOW).token == RangeToken.ONE_HOUR
