"""User records, their storage and the service that manages them."""

from __future__ import annotations

import abc
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(moment: Optional[datetime]) -> Optional[str]:
    return moment.isoformat() if moment is not None else None


class UserNotFoundError(LookupError):
    """Raised when no user has the requested ID."""

    def __init__(self, message: str = "user not found") -> None:
        super().__init__(message)


class EmptyUserIdError(ValueError):
    """Raised when a user without an ID is stored."""

    def __init__(self, message: str = "empty user ID") -> None:
        super().__init__(message)


@dataclass
class User:
    """A system user with audit timestamps and a version counter."""

    name: str = ""
    address: str = ""
    nickname: str = ""
    id: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON representation of the user."""
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "nickname": self.nickname,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "version": self.version,
        }


@dataclass(frozen=True)
class UpdateFields:
    """Optional changes to a user; ``None`` leaves a field unchanged."""

    name: Optional[str] = None
    address: Optional[str] = None
    nickname: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UpdateFields":
        """Build from a JSON object, ignoring unknown keys."""
        values = {}
        for key in ("name", "address", "nickname"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"field {key!r} must be a string")
            values[key] = value
        return cls(**values)


class UserStorage(abc.ABC):
    """Where users are kept."""

    @abc.abstractmethod
    def set(self, user: User) -> None:
        """Store or replace a user."""

    @abc.abstractmethod
    def read(self, user_id: str) -> User:
        """Return the user with this ID or raise UserNotFoundError."""

    @abc.abstractmethod
    def delete(self, user_id: str) -> None:
        """Remove the user with this ID or raise UserNotFoundError."""


class LocalUserStorage(UserStorage):
    """In-memory user storage."""

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    def set(self, user: User) -> None:
        if not user.id:
            raise EmptyUserIdError()
        self._users[user.id] = user

    def read(self, user_id: str) -> User:
        try:
            return self._users[user_id]
        except KeyError:
            raise UserNotFoundError() from None

    def delete(self, user_id: str) -> None:
        self.read(user_id)
        del self._users[user_id]


class UserService:
    """Creates, reads, updates and deletes users."""

    def __init__(self, storage: UserStorage) -> None:
        self._storage = storage

    def create(self, user: User) -> User:
        """Assign an ID, timestamps and version 1, then store the user."""
        user.id = str(uuid.uuid4())
        now = _now()
        user.created_at = now
        user.updated_at = now
        user.version = 1
        self._storage.set(user)
        return user

    def get(self, user_id: str) -> User:
        return self._storage.read(user_id)

    def update(self, user_id: str, fields: UpdateFields) -> User:
        """Apply the given fields and bump the version."""
        existing = self._storage.read(user_id)
        if fields.name is not None:
            existing.name = fields.name
        if fields.address is not None:
            existing.address = fields.address
        if fields.nickname is not None:
            existing.nickname = fields.nickname
        existing.updated_at = _now()
        existing.version += 1
        self._storage.set(existing)
        return existing

    def delete(self, user_id: str) -> None:
        self._storage.delete(user_id)