from typing import Optional

import attrs


@attrs.frozen
class User:
    id: int
    name: str
    email: Optional[str] = attrs.field(default=None, repr=False)

    def to_short(self) -> 'UserShort':
        return UserShort(id=self.id, name=self.name)


@attrs.frozen
class UserShort:
    id: int
    name: str
