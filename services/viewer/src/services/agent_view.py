"""Per-agent live metrics view.

Owns the raw sample sequence, the polling task and the request counter for
one displayed agent. All mutation happens on the event loop; nothing is
shared between views.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol, Sequence, Set

from src.core.config import settings
from src.core.logger import get_logger
from src.domain.errors import MetricsFetchError
from src.domain.models import DashboardSnapshot, MetricSample, Window
from src.infrastructure.api.metrics import (
    POLL_TICKS_SKIPPED_TOTAL,
    STALE_FETCHES_DISCARDED_TOTAL,
)
from src.metrics.formatting import TimestampFormatter
from src.metrics.interval import estimate_interval
from src.metrics.pipeline import build_charts
from src.metrics.summary import build_summary
from src.metrics.windows import resolve_window

from shared.constants import RangeToken

logger = get_logger("viewer.agent_view")


class SampleSource(Protocol):
    async def fetch(
        self, agent_id: str, lower_bound: datetime, auth_token: str
    ) -> List[MetricSample]: ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AgentMetricsView:
    """Polls one agent's metrics and keeps a chart-ready snapshot.

    Every issued fetch is stamped with an increasing request number. A
    result is applied only if its number is still the latest issued one, so
    a slow read started under an old window can never overwrite data for
    the window selected after it.
    """

    def __init__(
        self,
        agent_id: str,
        auth_token: str,
        source: SampleSource,
        range_token: "str | RangeToken | None" = None,
        poll_interval: float | None = None,
        clock: Callable[[], datetime] = utcnow,
        formatter: TimestampFormatter | None = None,
    ):
        self.agent_id = agent_id
        self._auth_token = auth_token
        self._source = source
        self._clock = clock
        self._formatter = formatter or TimestampFormatter()
        self.poll_interval = poll_interval or settings.poll_interval_seconds

        self._window = resolve_window(range_token or settings.default_range, clock())
        self._samples: List[MetricSample] = []
        self._snapshot = DashboardSnapshot(agent_id=agent_id, window=self._window)

        self._issued = 0
        self._inflight: Optional[asyncio.Task] = None
        self._pending: Set[asyncio.Task] = set()
        self._poll_task: Optional[asyncio.Task] = None
        self._stopped = False

    @property
    def window(self) -> Window:
        return self._window

    @property
    def samples(self) -> Sequence[MetricSample]:
        return tuple(self._samples)

    @property
    def snapshot(self) -> DashboardSnapshot:
        return self._snapshot

    @property
    def formatter(self) -> TimestampFormatter:
        return self._formatter

    @property
    def running(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    async def start(self) -> None:
        if self._stopped:
            raise RuntimeError("view already stopped")
        if self._poll_task is None:
            self._poll_task = asyncio.create_task(
                self._poll_loop(), name=f"poll:{self.agent_id}"
            )

    async def stop(self) -> None:
        """Cancel polling and outstanding reads, then wait for them to end."""
        self._stopped = True
        # Anything still resolving is now stale
        self._issued += 1
        tasks = [t for t in (self._poll_task, *self._pending) if t is not None]
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._poll_task = None
        self._inflight = None
        self._pending.clear()
        logger.debug("agent_view_stopped", extra={"agent_id": self.agent_id})

    async def __aenter__(self) -> "AgentMetricsView":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    def select_window(self, token: "str | RangeToken | None") -> Window:
        """Switch to a new window and fetch for it immediately."""
        self._window = resolve_window(token, self._clock())
        if not self._stopped:
            self._issue()
        return self._window

    def tick(self) -> bool:
        """One polling step; returns False when skipped.

        The window is re-resolved against the current time so it keeps
        rolling. A tick never queues behind a read that is still in flight.
        """
        if self._stopped:
            return False
        if self._inflight is not None and not self._inflight.done():
            POLL_TICKS_SKIPPED_TOTAL.inc()
            logger.debug("poll_tick_skipped", extra={"agent_id": self.agent_id})
            return False
        self._window = resolve_window(self._window.token, self._clock())
        self._issue()
        return True

    async def refresh(self) -> DashboardSnapshot:
        """Fetch for the current window now and wait for the outcome."""
        if not self._stopped:
            self._issue()
        await self.wait_until_idle()
        return self._snapshot

    async def wait_until_idle(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _poll_loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            self.tick()
            next_tick += self.poll_interval
            now = loop.time()
            # Fixed schedule; ticks missed while the loop was blocked are dropped
            while next_tick <= now:
                next_tick += self.poll_interval
            await asyncio.sleep(next_tick - now)

    def _issue(self) -> None:
        self._issued += 1
        task = asyncio.create_task(self._fetch(self._issued, self._window))
        self._inflight = task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _fetch(self, request_seq: int, window: Window) -> None:
        try:
            samples = await self._source.fetch(
                self.agent_id, window.lower_bound, self._auth_token
            )
        except MetricsFetchError as e:
            if request_seq != self._issued:
                return
            logger.warning(
                "metrics_fetch_failed",
                extra={
                    "agent_id": self.agent_id,
                    "reason": e.reason,
                    "status_code": e.status_code,
                },
            )
            self._snapshot = self._snapshot.model_copy(update={"last_error": str(e)})
            return
        except Exception as e:  # noqa: BLE001
            logger.exception(
                "metrics_refresh_failed",
                extra={"agent_id": self.agent_id, "error": str(e)},
            )
            if request_seq == self._issued:
                self._snapshot = self._snapshot.model_copy(
                    update={"last_error": str(e)}
                )
            return

        if request_seq != self._issued:
            STALE_FETCHES_DISCARDED_TOTAL.inc()
            logger.debug(
                "stale_fetch_discarded",
                extra={
                    "agent_id": self.agent_id,
                    "request_seq": request_seq,
                    "latest_seq": self._issued,
                },
            )
            return
        try:
            self._apply(samples, window)
        except Exception as e:  # noqa: BLE001
            logger.exception(
                "metrics_apply_failed",
                extra={"agent_id": self.agent_id, "error": str(e)},
            )
            self._snapshot = self._snapshot.model_copy(update={"last_error": str(e)})

    def _apply(self, samples: List[MetricSample], window: Window) -> None:
        # Build everything first; state is replaced only as a whole
        now = self._clock()
        fresh = list(samples)
        interval = estimate_interval([s.timestamp for s in fresh])
        snapshot = DashboardSnapshot(
            agent_id=self.agent_id,
            window=window,
            charts=build_charts(fresh, self._formatter, interval),
            summary=build_summary(fresh, interval, now, self._formatter),
            sample_count=len(fresh),
            expected_interval_seconds=interval,
            updated_at=now,
            last_error=None,
        )
        self._samples = fresh
        self._snapshot = snapshot
