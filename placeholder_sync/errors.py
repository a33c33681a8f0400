"""
Error types. Handlers turn these into JSON responses with the matching status.
"""


class AppError(Exception):
    status = 500

    def __init__(self, message: str, error: str = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_dict(self) -> dict:
        body = {'message': self.message}
        if self.error:
            body['error'] = self.error
        return body


class FetchError(AppError):
    """Upstream unreachable, answered with an error status, or sent a non-JSON body."""


class NotInitialized(AppError):
    """Store used before connect()."""


class StoreError(AppError):
    """Generic database failure."""


class NotFound(AppError):
    status = 404


class Conflict(AppError):
    status = 409


class ValidationError(AppError):
    status = 400


class ConfigError(Exception):
    """Missing or malformed environment configuration."""
