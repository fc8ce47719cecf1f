class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    reason: str = 'Unexpected error.'

    def __init__(self, message: str, status_code: int = 500, *, reason: str | None = None) -> None:
        self.message = message
        self.status_code = status_code
        if reason is not None:
            self.reason = reason
        super().__init__(message)


class NotFoundError(CustomBaseError):
    reason = 'The required object was not found.'

    def __init__(self, message: str, *, reason: str | None = None) -> None:
        super().__init__(message, 404, reason=reason)


class ValidationError(CustomBaseError):
    reason = 'Incorrectly made request.'

    def __init__(self, message: str, *, reason: str | None = None) -> None:
        super().__init__(message, 400, reason=reason)


class ConflictError(CustomBaseError):
    reason = 'For the requested operation the conditions are not met.'

    def __init__(self, message: str, *, reason: str | None = None) -> None:
        super().__init__(message, 409, reason=reason)


class StatsUnavailableError(CustomBaseError):
    """Stats collector failed or timed out. Never surfaced to API callers."""

    reason = 'Stats service unavailable.'

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)
