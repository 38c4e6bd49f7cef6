import uuid
from datetime import tzinfo
from typing import Dict, Optional

from src.core.logger import get_logger
from src.domain.errors import ViewNotFoundError
from src.domain.models import Window
from src.infrastructure.api.metrics import OPEN_VIEWS
from src.metrics.formatting import TimestampFormatter

from shared.constants import RangeToken

from .agent_view import AgentMetricsView, SampleSource

logger = get_logger("viewer.registry")


class ViewRegistry:
    """Open agent views keyed by an opaque view id.

    Views share the metrics source (and its connection pool) but nothing
    else; closing a view stops its polling before it is forgotten. Each view
    formats timestamps in the zone of the client that opened it.
    """

    def __init__(self, source: SampleSource, formatter: TimestampFormatter | None = None):
        self._source = source
        self._formatter = formatter or TimestampFormatter()
        self._views: Dict[str, AgentMetricsView] = {}

    def __len__(self) -> int:
        return len(self._views)

    def __contains__(self, view_id: str) -> bool:
        return view_id in self._views

    async def open(
        self,
        agent_id: str,
        auth_token: str,
        range_token: "str | RangeToken | None" = None,
        tz: Optional[tzinfo] = None,
    ) -> str:
        formatter = TimestampFormatter(tz) if tz is not None else self._formatter
        view = AgentMetricsView(
            agent_id,
            auth_token,
            self._source,
            range_token=range_token,
            formatter=formatter,
        )
        await view.start()
        view_id = uuid.uuid4().hex
        self._views[view_id] = view
        OPEN_VIEWS.set(len(self._views))
        logger.info(
            "agent_view_opened",
            extra={
                "view_id": view_id,
                "agent_id": agent_id,
                "range": view.window.token.value,
                "tz": str(tz) if tz is not None else "local",
            },
        )
        return view_id

    def get(self, view_id: str) -> AgentMetricsView:
        try:
            return self._views[view_id]
        except KeyError:
            raise ViewNotFoundError(view_id) from None

    def change_window(self, view_id: str, range_token: "str | RangeToken | None") -> Window:
        return self.get(view_id).select_window(range_token)

    async def close(self, view_id: str) -> None:
        view = self._views.pop(view_id, None)
        if view is None:
            raise ViewNotFoundError(view_id)
        OPEN_VIEWS.set(len(self._views))
        await view.stop()
        logger.info("agent_view_closed", extra={"view_id": view_id})

    async def close_all(self) -> None:
        views = list(self._views.items())
        self._views.clear()
        OPEN_VIEWS.set(0)
        for view_id, view in views:
            await view.stop()
        logger.info("agent_views_closed", extra={"count": len(views)})
