"""User use-cases: each returns a response envelope or raises ApiError."""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional, Union

import bcrypt
from sqlalchemy.exc import SQLAlchemyError

from .constant import ResponseStatus
from .models import User
from .responses import ApiResponse, build_response, raise_status

log = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 15

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")
_REPOSITORY_ERRORS = (SQLAlchemyError, LookupError)


def parse_user_id(raw: Any) -> int:
    """Decimal id from a path; malformed input gives 0, out-of-range input is clamped."""
    if not isinstance(raw, str) or not _DECIMAL.fullmatch(raw):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(raw)))


def _user_id(value: Union[str, int]) -> int:
    return parse_user_id(value) if isinstance(value, str) else int(value)


def _int_field(payload: dict, field: str) -> int:
    value = payload.get(field)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {field!r} must be an integer")
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"field {field!r} is out of range")
    return value


def _str_field(payload: dict, field: str) -> str:
    value = payload.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {field!r} must be a string")
    return value


def _bind_user(payload: Any) -> User:
    """Build a user from a request body; the password is never taken from it."""
    if not isinstance(payload, dict):
        raise ValueError("request body must be a JSON object")
    role = payload.get("role")
    if role is not None:
        if not isinstance(role, dict):
            raise ValueError("field 'role' must be an object")
        _int_field(role, "id")
        _str_field(role, "role")
    return User(
        id=_int_field(payload, "id"),
        name=_str_field(payload, "name"),
        email=_str_field(payload, "email"),
        password="",
        status=_int_field(payload, "status"),
        role_id=_int_field(payload, "role_id"),
    )


class UserService:
    """User operations on top of a user repository."""

    def __init__(self, repository: Any, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._repository = repository
        self._bcrypt_rounds = bcrypt_rounds

    def get_all_users(self) -> ApiResponse[List[User]]:
        log.info("start to execute get all data user")
        try:
            data = self._repository.find_all_users()
        except _REPOSITORY_ERRORS as exc:
            log.error("Happened Error when find all user data. Error: %s", exc)
            raise_status(ResponseStatus.UNKNOWN_ERROR)
        return build_response(ResponseStatus.SUCCESS, data)

    def get_user_by_id(self, user_id: Union[str, int]) -> ApiResponse[User]:
        log.info("start to execute program get user by id")
        try:
            data = self._repository.find_user_by_id(_user_id(user_id))
        except _REPOSITORY_ERRORS as exc:
            log.error("Happened error when get data from database. Error %s", exc)
            raise_status(ResponseStatus.DATA_NOT_FOUND)
        return build_response(ResponseStatus.SUCCESS, data)

    def add_user(self, payload: Optional[Any]) -> ApiResponse[User]:
        log.info("start to execute program add data user")
        try:
            request = _bind_user(payload)
        except ValueError as exc:
            log.error("Happened error when mapping request from FE. Error %s", exc)
            raise_status(ResponseStatus.INVALID_REQUEST)
        salt = bcrypt.gensalt(rounds=self._bcrypt_rounds)
        request.password = bcrypt.hashpw(request.password.encode(), salt).decode()
        try:
            data = self._repository.save(request)
        except _REPOSITORY_ERRORS as exc:
            log.error("Happened error when saving data to database. Error %s", exc)
            raise_status(ResponseStatus.UNKNOWN_ERROR)
        return build_response(ResponseStatus.SUCCESS, data)

    def update_user(self, user_id: Union[str, int], payload: Optional[Any]) -> ApiResponse[User]:
        log.info("start to execute program update user data by id")
        target_id = _user_id(user_id)
        try:
            request = _bind_user(payload)
        except ValueError as exc:
            log.error("Happened error when mapping request from FE. Error %s", exc)
            raise_status(ResponseStatus.INVALID_REQUEST)
        try:
            data = self._repository.find_user_by_id(target_id)
        except _REPOSITORY_ERRORS as exc:
            log.error("Happened error when get data from database. Error %s", exc)
            raise_status(ResponseStatus.DATA_NOT_FOUND)
        data.role_id = request.role_id
        data.email = request.email
        data.name = request.name
        data.status = request.status
        # A failed write is logged but still answered with the updated record.
        try:
            self._repository.save(data)
        except _REPOSITORY_ERRORS as exc:
            log.error("Happened error when updating data to database. Error %s", exc)
        return build_response(ResponseStatus.SUCCESS, data)

    def delete_user(self, user_id: Union[str, int]) -> ApiResponse[None]:
        log.info("start to execute delete data user by id")
        try:
            self._repository.delete_user_by_id(_user_id(user_id))
        except _REPOSITORY_ERRORS as exc:
            log.error("Happened Error when try delete data user from DB. Error: %s", exc)
            raise_status(ResponseStatus.UNKNOWN_ERROR)
        return build_response(ResponseStatus.SUCCESS, None)