import attrs


@attrs.frozen
class Category:
    id: int
    name: str
