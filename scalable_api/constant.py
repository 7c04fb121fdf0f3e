"""Response status codes shared by every API response."""

from __future__ import annotations

from enum import IntEnum

_UNKNOWN_KEY = "UNKNOWN"
_UNKNOWN_MESSAGE = "Unknown"


class ResponseStatus(IntEnum):
    """Outcome of an API call, numbered from 1."""

    SUCCESS = 1
    DATA_NOT_FOUND = 2
    UNKNOWN_ERROR = 3
    INVALID_REQUEST = 4
    UNAUTHORIZED = 5

    def key(self) -> str:
        """Machine-readable key, e.g. ``DATA_NOT_FOUND``."""
        return self.name

    def message(self) -> str:
        """Human-readable message, e.g. ``Data_NotFound``."""
        return _MESSAGES[self]


_MESSAGES = {
    ResponseStatus.SUCCESS: "Success",
    ResponseStatus.DATA_NOT_FOUND: "Data_NotFound",
    ResponseStatus.UNKNOWN_ERROR: "Unknown_Error",
    ResponseStatus.INVALID_REQUEST: "Invalid_Request",
    ResponseStatus.UNAUTHORIZED: "Unauthorized",
}


def status_key(value: int) -> str:
    """Key for a status number, or ``UNKNOWN`` if it is out of range."""
    try:
        return ResponseStatus(value).key()
    except ValueError:
        return _UNKNOWN_KEY


def status_message(value: int) -> str:
    """Message for a status number, or ``Unknown`` if it is out of range."""
    try:
        return ResponseStatus(value).message()
    except ValueError:
        return _UNKNOWN_MESSAGE