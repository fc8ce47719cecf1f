"""Parsing helpers for list and datetime query parameters."""

from datetime import datetime
from typing import List, Optional

from fastapi import Request

from src.platform.exception.exceptions import ValidationError
from src.service.event_hub.app.dto.request_context import RequestContext
from src.service.event_hub.driving_adapter.http_controller.schema.event_schema import (
    parse_wire_datetime,
)


def split_csv(values: Optional[List[str]]) -> List[str]:
    """Accepts both `ids=1&ids=2` and `ids=1,2`."""
    if not values:
        return []
    return [item.strip() for value in values for item in value.split(',') if item.strip()]


def parse_int_list(values: Optional[List[str]], *, name: str) -> tuple[int, ...]:
    try:
        return tuple(int(item) for item in split_csv(values))
    except ValueError:
        raise ValidationError(f"'{name}' must contain integers only")


def parse_query_datetime(value: Optional[str], *, name: str) -> Optional[datetime]:
    if value is None or not value.strip():
        return None
    try:
        return parse_wire_datetime(value.strip())
    except ValueError:
        raise ValidationError(f"'{name}' must use the format 'yyyy-MM-dd HH:mm:ss'")


def request_context(request: Request) -> RequestContext:
    ip = request.client.host if request.client else '0.0.0.0'
    return RequestContext(path=request.url.path, ip=ip)
