"""
Test Configuration and Fixtures

- Environment setup happens before any application import, since settings
  are read at import time
- Unit tests (test/**/unit/) use mocks for every port: no database and no
  stats collector are needed
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# =============================================================================
import os


def _early_setup_test_environment() -> None:
    os.environ['POSTGRES_DB'] = 'event_hub_test_db'
    os.environ.setdefault('DEBUG', 'true')
    os.environ.setdefault('LOG_TO_FILE', 'false')
    os.environ.setdefault('STATS_SERVER_URL', 'http://stats.test')
    os.environ.setdefault('STATS_APP_NAME', 'ewm-main-service')


_early_setup_test_environment()

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402

from test.service.event_hub.helpers import build_event  # noqa: E402


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def pending_event(now: datetime):
    return build_event(event_date=now + timedelta(days=10), created_on=now - timedelta(days=1))
