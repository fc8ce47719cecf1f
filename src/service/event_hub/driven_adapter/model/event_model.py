from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base

if TYPE_CHECKING:
    from src.service.event_hub.driven_adapter.model.category_model import CategoryModel
    from src.service.event_hub.driven_adapter.model.location_model import LocationModel
    from src.service.event_hub.driven_adapter.model.user_model import UserModel


class EventModel(Base):
    __tablename__ = 'events'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(120), nullable=False)
    annotation: Mapped[str] = mapped_column(String(2000), nullable=False)
    description: Mapped[str] = mapped_column(String(7000), nullable=False)
    event_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    published_on: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    paid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    participant_limit: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    request_moderation: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    confirmed_requests: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    state: Mapped[str] = mapped_column(String(20), default='PENDING', nullable=False, index=True)
    initiator_id: Mapped[int] = mapped_column(Integer, ForeignKey('users.id'), nullable=False)
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey('categories.id'), nullable=False)
    location_id: Mapped[int] = mapped_column(Integer, ForeignKey('locations.id'), nullable=False)

    # Relationships
    initiator: Mapped['UserModel'] = relationship(
        'UserModel', foreign_keys=[initiator_id], lazy='selectin'
    )
    category: Mapped['CategoryModel'] = relationship(
        'CategoryModel', foreign_keys=[category_id], lazy='selectin'
    )
    location: Mapped['LocationModel'] = relationship(
        'LocationModel', foreign_keys=[location_id], lazy='selectin'
    )
