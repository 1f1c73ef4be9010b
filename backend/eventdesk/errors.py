"""Error kinds raised by the event service and their HTTP mapping."""

from __future__ import annotations

from typing import Optional

from fastapi import status


class EventError(Exception):
    """Base class; every failure the service reports is one of the subclasses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InputError(EventError):
    """Malformed id or a body that fails validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input"


class NotFoundError(EventError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Event not found"


class StorageError(EventError):
    """
    The store could not be reached or rejected a query. The underlying
    exception is chained and logged, never shown to the caller.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal Server Error"
