from typing import Optional

import attrs


@attrs.frozen
class Location:
    """A stored point; events reference locations by id and share them."""

    lat: float
    lon: float
    id: Optional[int] = None
