from datetime import datetime

from src.domain.models import Window

from shared.constants import RangeToken


def resolve_window(token: "str | RangeToken | None", now: datetime) -> Window:
    """Resolve a range token against ``now``.

    Unknown tokens resolve to the 5 minute window rather than failing.
    """
    range_token = RangeToken.parse(token)
    return Window(token=range_token, lower_bound=now - range_token.duration)
