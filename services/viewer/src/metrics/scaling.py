import math
from typing import Optional

from src.core.config import settings
from src.domain.models import Series

AXIS_LOWER_BOUND = 0.0


def axis_upper_bound(series: Series, headroom: float | None = None) -> Optional[float]:
    """Upper display limit for a series' value axis.

    None when the series has no values at all, so the renderer keeps its
    own default. Non-positive maxima pin the bound to 1.
    """
    if headroom is None:
        headroom = settings.axis_headroom
    present = [v for v in series if v is not None]
    if not present:
        return None
    # strip float noise before ceil: 1.05 * 100 must give 105, not 106
    bound = math.ceil(round(headroom * max(present), 9))
    if bound <= 0:
        return 1.0
    return float(bound)
