"""Domain errors raised by the aggregation core and the write operations.

Each error carries the HTTP status the app factory maps it to. Empty data is
never an error: aggregations return zeroed or empty results instead.
"""


class DomainError(Exception):
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(DomainError):
    """Referenced user, store or friendship does not exist."""

    status_code = 404


class Forbidden(DomainError):
    """Authenticated caller fails a role or ownership check."""

    status_code = 403


class Conflict(DomainError):
    """Duplicate friendship request, duplicate store for an owner, bad transition."""

    status_code = 409


class ValidationFailure(DomainError):
    """Malformed input to a creation operation."""

    status_code = 400
