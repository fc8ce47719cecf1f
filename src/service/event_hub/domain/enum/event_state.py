from enum import StrEnum

from src.platform.exception.exceptions import ValidationError


class EventState(StrEnum):
    PENDING = 'PENDING'
    PUBLISHED = 'PUBLISHED'
    CANCELED = 'CANCELED'

    @classmethod
    def from_str(cls, value: str) -> 'EventState':
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValidationError(f'Unknown state: {value}')
