"""Application layer DTOs"""

from src.service.event_hub.app.dto.event_dto import EventFullDto, EventShortDto
from src.service.event_hub.app.dto.request_context import RequestContext

__all__ = ['EventFullDto', 'EventShortDto', 'RequestContext']
