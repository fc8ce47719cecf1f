"""
View Stats Aggregator

Best-effort bridge to the hit collector:
- schedule_hit: fire-and-forget hit on its own task, the read never waits for it
- record_hit: tells the collector an endpoint was read; failures are logged
- fetch_counts / fetch_count: hit counts per URI, zero when the collector is down

Key convention:
- collection reads merge counts under "<request path>/<event id>"
- single-resource reads merge counts under the exact request path
"""

import asyncio
from datetime import datetime
from typing import Iterable, List, Optional

from src.platform.exception.exceptions import StatsUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.event_hub_metrics import metrics
from src.service.event_hub.app.dto.request_context import RequestContext
from src.service.event_hub.app.interface.i_stats_client import IStatsClient
from src.service.event_hub.domain.entity.event_entity import Event


def collection_key(request_path: str, event_id: int) -> str:
    return f'{request_path.rstrip("/")}/{event_id}'


def window_start_for(events: Iterable[Event]) -> Optional[datetime]:
    """Earliest publication moment, falling back to the earliest creation moment."""
    events = list(events)
    published = [event.published_on for event in events if event.published_on is not None]
    if published:
        return min(published)
    created = [event.created_on for event in events]
    return min(created) if created else None


class ViewStatsAggregator:
    def __init__(self, *, stats_client: IStatsClient) -> None:
        self.stats_client = stats_client
        self._pending_hits: set[asyncio.Task[None]] = set()

    def schedule_hit(self, *, context: RequestContext, timestamp: datetime) -> None:
        task = asyncio.create_task(self.record_hit(context=context, timestamp=timestamp))
        self._pending_hits.add(task)
        task.add_done_callback(self._on_hit_done)

    def _on_hit_done(self, task: asyncio.Task[None]) -> None:
        self._pending_hits.discard(task)
        if task.cancelled():
            return
        if (exc := task.exception()) is not None:
            Logger.base.error(f'❌ [STATS] Hit task failed: {type(exc).__name__}: {exc}')

    async def drain(self) -> None:
        """Wait for hits still in flight (shutdown, tests)."""
        if self._pending_hits:
            await asyncio.gather(*self._pending_hits, return_exceptions=True)

    async def record_hit(self, *, context: RequestContext, timestamp: datetime) -> None:
        try:
            await self.stats_client.record_hit(uri=context.path, ip=context.ip, timestamp=timestamp)
        except StatsUnavailableError as e:
            Logger.base.warning(f'⚠️ [STATS] Hit for {context.path} not recorded: {e.message}')
            metrics.record_hit(result='failed')
            return
        metrics.record_hit(result='sent')

    async def fetch_counts(
        self,
        *,
        request_path: str,
        event_ids: List[int],
        start: datetime,
        end: datetime,
        unique: bool = False,
    ) -> dict[str, int]:
        """Hits per "<request path>/<event id>" key; empty ids never reach the collector."""
        if not event_ids:
            return {}
        uris = [collection_key(request_path, event_id) for event_id in event_ids]
        return await self._query(
            uris=uris, start=start, end=end, unique=unique, operation='fetch_counts'
        )

    async def fetch_count(
        self, *, request_path: str, start: datetime, end: datetime, unique: bool = True
    ) -> int:
        counts = await self._query(
            uris=[request_path], start=start, end=end, unique=unique, operation='fetch_count'
        )
        return counts.get(request_path, 0)

    @Logger.io
    async def views_for_events(
        self, *, request_path: str, events: List[Event], now: datetime
    ) -> dict[int, int]:
        """Collection view: event id -> hits over [earliest publication, now], non-unique."""
        start = window_start_for(events)
        if start is None:
            return {}
        event_ids = [event.id for event in events if event.id is not None]
        counts = await self.fetch_counts(
            request_path=request_path, event_ids=event_ids, start=start, end=now, unique=False
        )
        return {
            event_id: counts.get(collection_key(request_path, event_id), 0)
            for event_id in event_ids
        }

    @Logger.io
    async def views_for_event(self, *, request_path: str, event: Event, now: datetime) -> int:
        """Single-resource view: unique hits on the exact request path since publication."""
        start = event.published_on or event.created_on
        return await self.fetch_count(request_path=request_path, start=start, end=now, unique=True)

    async def _query(
        self, *, uris: List[str], start: datetime, end: datetime, unique: bool, operation: str
    ) -> dict[str, int]:
        try:
            rows = await self.stats_client.query(uris=uris, start=start, end=end, unique=unique)
        except StatsUnavailableError as e:
            Logger.base.warning(
                f'⚠️ [STATS] Falling back to zero views for {len(uris)} uris: {e.message}'
            )
            metrics.record_stats_fallback(operation=operation)
            return {}

        counts: dict[str, int] = {}
        for row in rows:
            counts[row.uri] = counts.get(row.uri, 0) + row.hits
        return counts
