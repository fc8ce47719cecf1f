import attrs

from src.platform.exception.exceptions import ValidationError


@attrs.frozen
class PageRequest:
    """
    Offset-based page window.

    The offset is aligned down to a whole page: from=15, size=10 reads the
    second page (rows 10..19), not rows 15..24.
    """

    from_: int = 0
    size: int = 10

    def __attrs_post_init__(self) -> None:
        if self.from_ < 0:
            raise ValidationError("'from' must not be negative")
        if self.size < 1:
            raise ValidationError("'size' must be positive")

    @property
    def page_number(self) -> int:
        return self.from_ // self.size

    @property
    def offset(self) -> int:
        return self.page_number * self.size

    @property
    def limit(self) -> int:
        return self.size
