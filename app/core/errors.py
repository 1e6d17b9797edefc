# app/core/errors.py
"""
Domain errors raised below the HTTP layer.

Routers never build error responses for these themselves; the handlers
registered in app.main turn them into ``{"detail": message}`` with the
matching status code.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or malformed required input."""
    status_code = 400


class ConflictError(AppError):
    """A unique name, email, code or roll number is already taken."""
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class PersistenceError(AppError):
    status_code = 500


class DataIntegrityError(AppError):
    """Stored data breaks an invariant (bad status value, missing class ref).

    Only produced by the offline repair pass; request handlers repair such
    rows silently instead of rejecting them.
    """
    status_code = 500
