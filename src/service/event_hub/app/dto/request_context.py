import attrs


@attrs.define(frozen=True)
class RequestContext:
    """Who asked for what: the request path and the client address."""

    path: str
    ip: str
