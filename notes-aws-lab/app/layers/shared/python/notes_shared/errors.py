# notes_shared/errors.py
"""Exceptions raised by the notes handlers and their shared layer."""


class NotesError(Exception):
    """Base class. Errors without a status code become a 500 response."""

    status_code = None


class Unauthorized(NotesError):
    status_code = 401

    def __init__(self, message="Unauthorized"):
        super().__init__(message)


class InvalidRequest(NotesError):
    status_code = 400


class NotFound(NotesError):
    status_code = 404

    def __init__(self, message="Note not found"):
        super().__init__(message)


class SecretUnavailable(NotesError):
    """Database credentials could not be read from Secrets Manager."""


class ConnectionTimeout(NotesError):
    """No database connection became available in time."""
