"""Domain records: OAuth clients, users and roles."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

__all__ = ["Client", "Role", "User", "UserRole"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Client:
    """A registered OAuth client and what it may ask for."""

    id: str
    redirect_uris: list[str] = field(default_factory=list)
    allowed_scopes: list[str] = field(default_factory=list)
    secret_hash: Optional[bytes] = None
    uuid: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def validate_redirect_uri(self, uri: str) -> bool:
        """Return whether ``uri`` is exactly one of the registered redirect URIs."""
        return uri in self.redirect_uris

    def validate_scopes(self, scopes: Iterable[str]) -> bool:
        """Return whether every scope in ``scopes`` is allowed for this client."""
        return all(scope in self.allowed_scopes for scope in scopes)


@dataclass
class Role:
    """A named role that users can hold."""

    name: str
    description: Optional[str] = None
    uuid: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass
class UserRole:
    """The link between a user and a role."""

    user_id: UUID
    role_id: UUID
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass
class User:
    """An account that can sign in."""

    username: str
    password_hash: str
    email: str
    uuid: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)