"""Response envelope and the error that turns into one."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, Generic, NoReturn, TypeVar

from .constant import ResponseStatus, status_key, status_message

T = TypeVar("T")


def _jsonable(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    return value


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """The envelope every endpoint answers with."""

    response_key: str
    response_message: str
    data: T

    def to_dict(self) -> Dict[str, Any]:
        return {
            "response_key": self.response_key,
            "response_message": self.response_message,
            "data": _jsonable(self.data),
        }


def build_raw_response(key: str, message: str, data: T) -> ApiResponse[T]:
    """Envelope with an explicit key and message."""
    return ApiResponse(response_key=key, response_message=message, data=data)


def build_response(status: ResponseStatus, data: T) -> ApiResponse[T]:
    """Envelope whose key and message come from ``status``."""
    return build_raw_response(status_key(status), status_message(status), data)


class ApiError(Exception):
    """An error that is answered with an envelope carrying no data."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
        self.message = message

    @classmethod
    def from_status(cls, status: ResponseStatus) -> "ApiError":
        return cls(status_key(status), status_message(status))

    def http_status(self) -> int:
        """HTTP status code the error is answered with."""
        if self.key == ResponseStatus.DATA_NOT_FOUND.key():
            return HTTPStatus.BAD_REQUEST
        if self.key == ResponseStatus.UNAUTHORIZED.key():
            return HTTPStatus.UNAUTHORIZED
        return HTTPStatus.INTERNAL_SERVER_ERROR

    def to_response(self) -> ApiResponse[None]:
        return build_raw_response(self.key, self.message, None)


def raise_status(status: ResponseStatus) -> NoReturn:
    """Raise the :class:`ApiError` for ``status``."""
    raise ApiError.from_status(status)