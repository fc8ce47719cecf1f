"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.event_hub.driven_adapter.model.category_model import CategoryModel
from src.service.event_hub.driven_adapter.model.event_model import EventModel
from src.service.event_hub.driven_adapter.model.location_model import LocationModel
from src.service.event_hub.driven_adapter.model.user_model import UserModel

__all__ = [
    'CategoryModel',
    'EventModel',
    'LocationModel',
    'UserModel',
]
