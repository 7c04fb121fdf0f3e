"""Persistence of users and roles."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List

from sqlalchemy import select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload, sessionmaker

from .models import Base, Role, User

log = logging.getLogger(__name__)

# Columns written by ``save``, with the value stored when the user leaves one unset.
_USER_FIELDS: Dict[str, object] = {
    "name": "",
    "email": "",
    "password": "",
    "status": 0,
    "role_id": 0,
}


class UserNotFoundError(LookupError):
    """No live user matches the requested id."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"record not found: user {user_id}")
        self.user_id = user_id


class UserRepository:
    """Reads and writes users; deleted users are kept but hidden."""

    def __init__(self, engine: Engine) -> None:
        Base.metadata.create_all(engine)
        self._sessions = sessionmaker(engine, expire_on_commit=False)

    def find_all_users(self) -> List[User]:
        """Every live user with its role loaded, in id order."""
        stmt = (
            select(User)
            .where(User.deleted_at.is_(None))
            .options(selectinload(User.role))
            .order_by(User.id)
        )
        try:
            with self._sessions() as session:
                return list(session.scalars(stmt))
        except SQLAlchemyError as exc:
            log.error("Got an error finding all users. Error: %s", exc)
            raise

    def find_user_by_id(self, user_id: int) -> User:
        """The live user with ``user_id``; an id of 0 selects the first user."""
        stmt = (
            select(User)
            .where(User.deleted_at.is_(None))
            .options(selectinload(User.role))
            .order_by(User.id)
        )
        if user_id:
            stmt = stmt.where(User.id == user_id)
        try:
            with self._sessions() as session:
                user = session.scalars(stmt.limit(1)).first()
        except SQLAlchemyError as exc:
            log.error("Got an error when find user by id. Error: %s", exc)
            raise
        if user is None:
            error = UserNotFoundError(user_id)
            log.error("Got an error when find user by id. Error: %s", error)
            raise error
        return user

    def save(self, user: User) -> User:
        """Insert ``user`` if its id is unset or unknown, otherwise overwrite it."""
        try:
            with self._sessions.begin() as session:
                target = session.get(User, user.id) if user.id else None
                if target is None:
                    target = User(id=user.id or None)
                    session.add(target)
                for field, zero in _USER_FIELDS.items():
                    value = getattr(user, field)
                    setattr(target, field, zero if value is None else value)
                session.flush()
                session.refresh(target, ["role"])
        except SQLAlchemyError as exc:
            log.error("Got an error when save user. Error: %s", exc)
            raise
        return target

    def delete_user_by_id(self, user_id: int) -> None:
        """Mark the user deleted; unknown ids are ignored."""
        stmt = (
            update(User)
            .where(User.id == user_id, User.deleted_at.is_(None))
            .values(deleted_at=datetime.now(timezone.utc))
        )
        try:
            with self._sessions.begin() as session:
                session.execute(stmt)
        except SQLAlchemyError as exc:
            log.error("Got an error when delete user. Error: %s", exc)
            raise


class RoleRepository:
    """Reads roles."""

    def __init__(self, engine: Engine) -> None:
        Base.metadata.create_all(engine)
        self._sessions = sessionmaker(engine, expire_on_commit=False)

    def find_all_roles(self) -> List[Role]:
        """Every live role, in id order."""
        stmt = select(Role).where(Role.deleted_at.is_(None)).order_by(Role.id)
        try:
            with self._sessions() as session:
                return list(session.scalars(stmt))
        except SQLAlchemyError as exc:
            log.error("Got an error finding all roles. Error: %s", exc)
            raise