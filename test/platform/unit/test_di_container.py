import pytest

from src.platform.config.di import Container
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.event_hub.app.service.view_stats_aggregator import ViewStatsAggregator
from src.service.event_hub.driven_adapter.stats.stats_client_impl import StatsClientImpl


@pytest.mark.unit
class TestContainer:
    def test_stats_wiring_shares_one_client(self) -> None:
        container = Container()

        aggregator = container.view_stats_aggregator()

        assert isinstance(aggregator, ViewStatsAggregator)
        assert aggregator is container.view_stats_aggregator()
        assert aggregator.stats_client is container.stats_client()
        assert isinstance(aggregator.stats_client, StatsClientImpl)
        assert aggregator.stats_client.base_url == 'http://stats.test'

    def test_unit_of_work_is_created_per_call(self) -> None:
        container = Container()

        first = container.unit_of_work()

        assert isinstance(first, SqlAlchemyUnitOfWork)
        assert first is not container.unit_of_work()
        assert first.session is None
