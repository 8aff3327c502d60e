"""Sale records, their storage and the service that manages them."""

from __future__ import annotations

import dataclasses
import enum
import os
import random
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

import requests

from salesdesk.users import UserNotFoundError

USER_SERVICE_URL_ENV = "USER_SERVICE_URL"
DEFAULT_USER_SERVICE_URL = "http://localhost:1234"
USER_LOOKUP_TIMEOUT = 10.0


class SaleStatus(str, enum.Enum):
    """Lifecycle state of a sale; the values are the wire strings."""

    PENDING = "Pending"
    APPROVED = "Aproved"
    REJECTED = "Rejected"


class SaleNotFoundError(LookupError):
    def __init__(self, message: str = "sale not found") -> None:
        super().__init__(message)


class EmptySaleIdError(ValueError):
    def __init__(self, message: str = "empty sale ID") -> None:
        super().__init__(message)


class SaleNotPendingError(Exception):
    def __init__(self, message: str = "Sale is not Pending") -> None:
        super().__init__(message)


class InvalidTransitionError(Exception):
    def __init__(self, message: str = "Invalid Transition") -> None:
        super().__init__(message)


class InvalidStatusError(ValueError):
    def __init__(self, message: str = "Invalid Status") -> None:
        super().__init__(message)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_status(value: Union[str, SaleStatus]) -> SaleStatus:
    try:
        return SaleStatus(value)
    except ValueError:
        raise InvalidStatusError() from None


@dataclass
class Sale:
    """A sale made by a user."""

    id: str
    user_id: str
    amount: float
    status: SaleStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 1

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON representation of the sale."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "amount": self.amount,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "version": self.version,
        }


class SaleStorage:
    """In-memory sale storage."""

    def __init__(self) -> None:
        self._sales: Dict[str, Sale] = {}

    def get_sale(self, sale_id: str) -> Sale:
        try:
            return self._sales[sale_id]
        except KeyError:
            raise SaleNotFoundError() from None

    def put_sale(self, sale: Sale) -> None:
        if not sale.id:
            raise EmptySaleIdError()
        self._sales[sale.id] = sale

    def get_by_user_status(
        self, user_id: str, status: Union[str, SaleStatus, None] = None
    ) -> List[Sale]:
        """Return copies of the user's sales, filtered by status if one is given."""
        return [
            dataclasses.replace(sale)
            for sale in self._sales.values()
            if sale.user_id == user_id and (not status or sale.status == status)
        ]


class SaleService:
    """Creates, updates and queries sales."""

    def __init__(self, storage: SaleStorage, user_service_url: Optional[str] = None) -> None:
        self._storage = storage
        self._user_service_url = user_service_url

    @property
    def user_service_url(self) -> str:
        """Base URL of the user service; the environment is read on each use."""
        url = (
            self._user_service_url
            or os.environ.get(USER_SERVICE_URL_ENV)
            or DEFAULT_USER_SERVICE_URL
        )
        return url.rstrip("/")

    def _user_is_missing(self, user_id: str) -> bool:
        # Only a definite 404 rejects the sale; an unreachable user service does not.
        try:
            response = requests.get(
                f"{self.user_service_url}/users/{user_id}", timeout=USER_LOOKUP_TIMEOUT
            )
        except requests.RequestException:
            return False
        return response.status_code == 404

    def create(self, user_id: str, amount: float) -> Sale:
        """Create a sale with a random status for an existing user."""
        if self._user_is_missing(user_id):
            raise UserNotFoundError()
        now = _now()
        sale = Sale(
            id=str(uuid.uuid4()),
            user_id=user_id,
            amount=amount,
            status=random.choice(list(SaleStatus)),
            created_at=now,
            updated_at=now,
            version=1,
        )
        self._storage.put_sale(sale)
        return sale

    def update(self, sale_id: str, status: Union[str, SaleStatus]) -> None:
        """Move a pending sale to an approved or rejected status."""
        sale = self._storage.get_sale(sale_id)
        new_status = _parse_status(status)
        if new_status is SaleStatus.PENDING:
            raise InvalidTransitionError()
        if sale.status is not SaleStatus.PENDING:
            raise SaleNotPendingError()
        sale.status = new_status
        sale.updated_at = _now()
        sale.version += 1
        self._storage.put_sale(sale)

    def get_by_user_status(
        self, user_id: str, status: Union[str, SaleStatus, None] = None
    ) -> List[Sale]:
        """Return the user's sales, optionally only those with a given status."""
        parsed = _parse_status(status) if status else None
        return self._storage.get_by_user_status(user_id, parsed)