"""
Unit tests for ViewStatsAggregator

The aggregator must never fail a read because of the stats collector.
"""

import asyncio
from datetime import datetime, timedelta
from unittest.mock import AsyncMock

from prometheus_client import REGISTRY
import pytest

from src.platform.exception.exceptions import StatsUnavailableError
from src.service.event_hub.app.dto.request_context import RequestContext
from src.service.event_hub.app.interface.i_stats_client import ViewStats
from src.service.event_hub.app.service.view_stats_aggregator import (
    ViewStatsAggregator,
    collection_key,
    window_start_for,
)
from test.service.event_hub.helpers import build_event, build_published_event


@pytest.fixture
def stats_client() -> AsyncMock:
    client = AsyncMock()
    client.record_hit = AsyncMock()
    client.query = AsyncMock(return_value=[])
    return client


@pytest.fixture
def aggregator(stats_client: AsyncMock) -> ViewStatsAggregator:
    return ViewStatsAggregator(stats_client=stats_client)


@pytest.mark.unit
class TestKeyConvention:
    def test_collection_key(self) -> None:
        assert collection_key('/events', 42) == '/events/42'
        assert collection_key('/events/', 42) == '/events/42'

    def test_window_start_is_earliest_publication(self, now: datetime) -> None:
        events = [
            build_published_event(published_on=now - timedelta(days=1)),
            build_published_event(published_on=now - timedelta(days=3)),
        ]

        assert window_start_for(events) == now - timedelta(days=3)

    def test_window_start_falls_back_to_creation(self, now: datetime) -> None:
        assert window_start_for([build_event(created_on=now)]) == now

    def test_window_start_of_nothing(self) -> None:
        assert window_start_for([]) is None


@pytest.mark.unit
class TestRecordHit:
    @pytest.mark.asyncio
    async def test_sends_path_ip_and_timestamp(
        self, aggregator: ViewStatsAggregator, stats_client: AsyncMock, now: datetime
    ) -> None:
        await aggregator.record_hit(
            context=RequestContext(path='/events', ip='10.0.0.1'), timestamp=now
        )

        stats_client.record_hit.assert_awaited_once_with(
            uri='/events', ip='10.0.0.1', timestamp=now
        )

    @pytest.mark.asyncio
    async def test_collector_failure_is_swallowed(
        self, aggregator: ViewStatsAggregator, stats_client: AsyncMock, now: datetime
    ) -> None:
        stats_client.record_hit.side_effect = StatsUnavailableError('connection refused')

        await aggregator.record_hit(
            context=RequestContext(path='/events', ip='10.0.0.1'), timestamp=now
        )

    @pytest.mark.asyncio
    async def test_schedule_hit_returns_before_collector_answers(
        self, aggregator: ViewStatsAggregator, stats_client: AsyncMock, now: datetime
    ) -> None:
        release = asyncio.Event()

        async def hang(**kwargs: object) -> None:
            await release.wait()

        stats_client.record_hit.side_effect = hang

        aggregator.schedule_hit(
            context=RequestContext(path='/events', ip='10.0.0.1'), timestamp=now
        )
        await asyncio.sleep(0)

        stats_client.record_hit.assert_awaited_once()
        release.set()
        await aggregator.drain()

    @pytest.mark.asyncio
    async def test_unexpected_hit_failure_stays_in_the_task(
        self, aggregator: ViewStatsAggregator, stats_client: AsyncMock, now: datetime
    ) -> None:
        stats_client.record_hit.side_effect = RuntimeError('boom')

        aggregator.schedule_hit(
            context=RequestContext(path='/events', ip='10.0.0.1'), timestamp=now
        )
        await aggregator.drain()

        stats_client.record_hit.assert_awaited_once()


@pytest.mark.unit
class TestFetchCounts:
    @pytest.mark.asyncio
    async def test_empty_ids_never_call_collector(
        self, aggregator: ViewStatsAggregator, stats_client: AsyncMock, now: datetime
    ) -> None:
        result = await aggregator.fetch_counts(
            request_path='/events', event_ids=[], start=now, end=now
        )

        assert result == {}
        stats_client.query.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_counts_keyed_by_collection_uri(
        self, aggregator: ViewStatsAggregator, stats_client: AsyncMock, now: datetime
    ) -> None:
        stats_client.query.return_value = [
            ViewStats(app='ewm-main-service', uri='/events/1', hits=3),
            ViewStats(app='ewm-main-service', uri='/events/2', hits=1),
        ]

        result = await aggregator.fetch_counts(
            request_path='/events', event_ids=[1, 2, 3], start=now - timedelta(days=1), end=now
        )

        assert result == {'/events/1': 3, '/events/2': 1}
        stats_client.query.assert_awaited_once_with(
            uris=['/events/1', '/events/2', '/events/3'],
            start=now - timedelta(days=1),
            end=now,
            unique=False,
        )

    @pytest.mark.asyncio
    async def test_fetch_count_uses_exact_path_and_unique(
        self, aggregator: ViewStatsAggregator, stats_client: AsyncMock, now: datetime
    ) -> None:
        stats_client.query.return_value = [
            ViewStats(app='ewm-main-service', uri='/events/42', hits=5)
        ]

        count = await aggregator.fetch_count(request_path='/events/42', start=now, end=now)

        assert count == 5
        assert stats_client.query.await_args.kwargs['uris'] == ['/events/42']
        assert stats_client.query.await_args.kwargs['unique'] is True

    @pytest.mark.asyncio
    async def test_collector_failure_degrades_to_zero(
        self, aggregator: ViewStatsAggregator, stats_client: AsyncMock, now: datetime
    ) -> None:
        stats_client.query.side_effect = StatsUnavailableError('timeout')
        events = [build_published_event(id=1), build_published_event(id=2)]

        views = await aggregator.views_for_events(request_path='/events', events=events, now=now)

        assert views == {1: 0, 2: 0}

    @pytest.mark.asyncio
    async def test_views_for_event_window_starts_at_publication(
        self, aggregator: ViewStatsAggregator, stats_client: AsyncMock, now: datetime
    ) -> None:
        event = build_published_event(id=42, published_on=now - timedelta(days=2))
        stats_client.query.return_value = [
            ViewStats(app='ewm-main-service', uri='/events/42', hits=7)
        ]

        views = await aggregator.views_for_event(request_path='/events/42', event=event, now=now)

        assert views == 7
        assert stats_client.query.await_args.kwargs['start'] == now - timedelta(days=2)
        assert stats_client.query.await_args.kwargs['end'] == now

    @pytest.mark.asyncio
    @pytest.mark.parametrize('operation', ['fetch_counts', 'fetch_count'])
    async def test_fallback_is_counted_under_its_operation(
        self,
        aggregator: ViewStatsAggregator,
        stats_client: AsyncMock,
        now: datetime,
        operation: str,
    ) -> None:
        stats_client.query.side_effect = StatsUnavailableError('timeout')
        labels = {'operation': operation}
        before = REGISTRY.get_sample_value('stats_fallbacks_total', labels) or 0.0

        if operation == 'fetch_counts':
            await aggregator.fetch_counts(
                request_path='/events', event_ids=[1], start=now, end=now
            )
        else:
            await aggregator.fetch_count(request_path='/events/1', start=now, end=now)

        assert REGISTRY.get_sample_value('stats_fallbacks_total', labels) == before + 1
