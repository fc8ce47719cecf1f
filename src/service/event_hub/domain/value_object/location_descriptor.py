import attrs


@attrs.frozen
class LocationDescriptor:
    """Coordinates supplied by a client, resolved to a stored Location before use."""

    lat: float
    lon: float
