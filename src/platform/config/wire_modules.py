"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.event_hub.app.command import create_event_use_case, update_event_use_case
from src.service.event_hub.app.query import get_event_use_case, list_events_use_case


WIRE_MODULES: list[ModuleType] = [
    create_event_use_case,
    update_event_use_case,
    get_event_use_case,
    list_events_use_case,
]
