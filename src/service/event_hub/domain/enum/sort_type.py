from enum import StrEnum

from src.platform.exception.exceptions import ValidationError


class SortType(StrEnum):
    EVENT_DATE = 'EVENT_DATE'
    VIEWS = 'VIEWS'

    @classmethod
    def from_str(cls, value: str) -> 'SortType':
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValidationError(f'Unknown sort type: {value}')
