from datetime import timedelta
from enum import Enum


class RangeToken(str, Enum):
    """Selectable relative time spans for the metrics charts."""

    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"
    THIRTY_MINUTES = "30m"
    ONE_HOUR = "1h"
    SIX_HOURS = "6h"
    ONE_DAY = "24h"
    SEVEN_DAYS = "7d"

    @property
    def duration(self) -> timedelta:
        return _DURATIONS[self]

    @classmethod
    def parse(cls, value: "str | RangeToken | None") -> "RangeToken":
        """Lenient lookup; anything unrecognised falls back to 5m."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.FIVE_MINUTES

    @classmethod
    def all_tokens(cls) -> list[str]:
        return [t.value for t in cls]


_DURATIONS = {
    RangeToken.FIVE_MINUTES: timedelta(minutes=5),
    RangeToken.FIFTEEN_MINUTES: timedelta(minutes=15),
    RangeToken.THIRTY_MINUTES: timedelta(minutes=30),
    RangeToken.ONE_HOUR: timedelta(hours=1),
    RangeToken.SIX_HOURS: timedelta(hours=6),
    RangeToken.ONE_DAY: timedelta(hours=24),
    RangeToken.SEVEN_DAYS: timedelta(days=7),
}
