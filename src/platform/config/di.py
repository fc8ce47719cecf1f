"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.event_hub.app.service.view_stats_aggregator import ViewStatsAggregator
from src.service.event_hub.driven_adapter.repo.category_query_repo_impl import (
    CategoryQueryRepoImpl,
)
from src.service.event_hub.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.event_hub.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.event_hub.driven_adapter.stats.stats_client_impl import StatsClientImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    # Unit of work: one per command, owns the session of the command repos
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Repositories (stateless - use session_factory per-request)
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )
    category_query_repo = providers.Singleton(
        CategoryQueryRepoImpl, session_factory=database.provided.session
    )

    # Stats collector (one pooled httpx client for the process)
    stats_client = providers.Singleton(StatsClientImpl)
    view_stats_aggregator = providers.Singleton(ViewStatsAggregator, stats_client=stats_client)


container = Container()


def setup() -> None:
    container.config_service()


async def cleanup() -> None:
    await container.view_stats_aggregator().drain()
    await container.stats_client().aclose()
    container.reset_singletons()
