from typing import Any, Optional


class AppError(Exception):
    """Base de los errores tipados que lanzan los servicios.

    La capa HTTP es la única que los traduce a respuestas (ver exception_handlers.py).
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppError):
    """Malformed or missing input."""
    status_code = 400


class AuthenticationError(AppError):
    """Missing, invalid or expired credentials."""
    status_code = 401


class InvalidTokenError(AuthenticationError):
    pass


class ForbiddenError(AppError):
    """Authenticated, but not allowed to act on this resource."""
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Uniqueness violation."""
    status_code = 409


class InvalidReferenceError(AppError):
    """A referenced id does not resolve to an existing (or active) record."""
    status_code = 400
