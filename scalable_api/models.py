"""Database models for users and their roles."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for all tables."""


class _Timestamps:
    """Bookkeeping columns kept out of every serialised form."""

    created_at: Mapped[Optional[datetime]] = mapped_column(
        "created_at", DateTime(timezone=True), default=_now
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        "updated_at", DateTime(timezone=True), default=_now, onupdate=_now
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        "deleted_at", DateTime(timezone=True), nullable=True, default=None
    )


_EMPTY_ROLE: Dict[str, Any] = {"id": 0, "role": ""}


class Role(_Timestamps, Base):
    """A role a user can hold."""

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column("id", Integer, primary_key=True, nullable=False)
    role: Mapped[str] = mapped_column("role", String, default="")

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id or 0, "role": self.role or ""}


class User(_Timestamps, Base):
    """An API user; the password hash is never serialised."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column("id", Integer, primary_key=True, nullable=False)
    name: Mapped[str] = mapped_column("name", String, default="")
    email: Mapped[str] = mapped_column("email", String, default="")
    password: Mapped[str] = mapped_column("password", String, default="")
    status: Mapped[int] = mapped_column("status", Integer, default=0)
    role_id: Mapped[int] = mapped_column(
        "role_id", Integer, ForeignKey("roles.id"), nullable=False
    )
    role: Mapped[Optional[Role]] = relationship(Role)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id or 0,
            "name": self.name or "",
            "email": self.email or "",
            "status": self.status or 0,
            "role_id": self.role_id or 0,
            "role": self.role.to_dict() if self.role is not None else dict(_EMPTY_ROLE),
        }