"""
Stats Client Implementation - httpx adapter to the hit collector

Wire contract:
- POST /hit    {"app", "uri", "ip", "timestamp"} -> 201
- GET  /stats  ?start&end&uris=..&uris=..&unique -> [{"app", "uri", "hits"}]

Datetimes travel as "yyyy-MM-dd HH:mm:ss" in UTC. Every transport, status or
payload failure surfaces as StatsUnavailableError; nothing is retried.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

import httpx

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import StatsUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.interface.i_stats_client import IStatsClient, ViewStats


STATS_DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'


def format_stats_datetime(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(STATS_DATETIME_FORMAT)


class StatsClientImpl(IStatsClient):
    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        app_name: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.STATS_SERVER_URL).rstrip('/')
        self.app_name = app_name or settings.STATS_APP_NAME
        self.timeout_seconds = timeout_seconds or settings.STATS_CLIENT_TIMEOUT_SECONDS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout_seconds),
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def record_hit(self, *, uri: str, ip: str, timestamp: datetime) -> None:
        payload = {
            'app': self.app_name,
            'uri': uri,
            'ip': ip,
            'timestamp': format_stats_datetime(timestamp),
        }
        await self._request('POST', '/hit', json=payload)

    async def query(
        self, *, uris: List[str], start: datetime, end: datetime, unique: bool
    ) -> List[ViewStats]:
        params: list[tuple[str, Any]] = [
            ('start', format_stats_datetime(start)),
            ('end', format_stats_datetime(end)),
            ('unique', 'true' if unique else 'false'),
        ]
        params.extend(('uris', uri) for uri in uris)
        response = await self._request('GET', '/stats', params=params)
        Logger.base.debug(f'📊 [STATS] Queried {len(uris)} uris, unique={unique}')

        try:
            return [
                ViewStats(app=str(row['app']), uri=str(row['uri']), hits=int(row['hits']))
                for row in response.json()
            ]
        except (ValueError, TypeError, KeyError) as e:
            raise StatsUnavailableError(f'Malformed stats response: {e}') from e

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._get_client().request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StatsUnavailableError(
                f'{method} {path} answered {e.response.status_code}'
            ) from e
        except httpx.HTTPError as e:
            raise StatsUnavailableError(f'{method} {path} failed: {type(e).__name__}: {e}') from e
        return response
