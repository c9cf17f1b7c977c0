"""
Domain entities shared by services and both storage backends.
Plain dataclasses: no ORM state, cheap to copy for the in-memory store.
"""

from dataclasses import dataclass
from datetime import datetime

STATUS_ACTIVE = "ACTIVE"
STATUS_INACTIVE = "INACTIVE"


def derive_status(stock: int) -> str:
    """Item status is a function of stock only."""
    return STATUS_ACTIVE if stock > 0 else STATUS_INACTIVE


@dataclass
class User:
    username: str
    password_hash: str = ""
    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Item:
    code: str
    title: str
    description: str
    price: int
    stock: int
    status: str = STATUS_INACTIVE
    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: int = 0
    updated_by: int = 0


@dataclass(frozen=True)
class SessionClaims:
    """Verified token payload."""

    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime
