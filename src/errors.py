"""Error taxonomy raised by services and stores, mapped to HTTP by the handlers."""


class ApiError(Exception):
    """Base for errors that carry their own HTTP status and user-facing message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Missing fields, wrong types or a too-short password."""

    status_code = 400


class ConflictError(ApiError):
    """A value that must be unique is already taken."""

    status_code = 400


class AuthenticationError(ApiError):
    status_code = 401


class NotFoundError(ApiError):
    status_code = 404


class InternalError(ApiError):
    status_code = 500
