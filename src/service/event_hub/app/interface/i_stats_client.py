"""
Stats Client Interface

Port to the external hit collector. Implementations raise
StatsUnavailableError on any transport or protocol failure; callers decide
how to degrade.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

import attrs


@attrs.define(frozen=True)
class ViewStats:
    app: str
    uri: str
    hits: int


class IStatsClient(ABC):
    @abstractmethod
    async def record_hit(self, *, uri: str, ip: str, timestamp: datetime) -> None:
        pass

    @abstractmethod
    async def query(
        self, *, uris: List[str], start: datetime, end: datetime, unique: bool
    ) -> List[ViewStats]:
        pass
