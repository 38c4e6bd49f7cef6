"""Display formatting for values crossing the rendering boundary.

Timestamps are always rendered through ``format_timestamp``; axis ticks and
tooltips both go through ``TimestampFormatter`` so one instant has exactly
one textual form in the interface.
"""

from datetime import datetime, timezone, tzinfo
from typing import Optional

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"

_BYTE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def format_timestamp(instant: datetime, tz: Optional[tzinfo] = None) -> str:
    """Format as ``YYYY-MM-DD HH:mm:ss`` in ``tz`` (viewer local time if None)."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(tz).strftime(DISPLAY_FORMAT)


class TimestampFormatter:
    """Formatter bound to one viewer timezone."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz

    def __call__(self, instant: datetime) -> str:
        return format_timestamp(instant, self.tz)

    def axis_tick(self, instant: datetime) -> str:
        return self(instant)

    def tooltip(self, instant: datetime) -> str:
        return self(instant)


def format_bytes(size: float) -> str:
    """Human readable size using 1024 steps, e.g. ``1.5 KB``."""
    if size <= 0:
        return "0 B"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_BYTE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_BYTE_UNITS[unit]}"
