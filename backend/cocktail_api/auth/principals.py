"""
Cocktail API — Principals and the Principal Registry
======================================================

What:  The authenticated identity type and the fixed set of known identities.
Why:   Authentication maps a credential to a Principal; authorization reads the
       Principal's role and permissions.
How:   PrincipalRegistry indexes PrincipalRecords by API key and by principal id.
       It is built once at startup and handed to the app factory.

Note:
    There is no user store. The registry is static configuration and the
    credentials below are mock values for development and tests.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional

TOKEN_PREFIX = "mock-jwt-"


class Role(str, Enum):
    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


@dataclass(frozen=True)
class Principal:
    """
    Authenticated caller identity, attached to `request.state.principal`.
    """

    id: str
    username: str
    role: Role
    permissions: FrozenSet[str]

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def has_role(self, *roles: str) -> bool:
        return self.role.value in roles

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role.value,
            "permissions": sorted(self.permissions),
        }


@dataclass(frozen=True)
class PrincipalRecord:
    """A registry row: the principal plus the API key that identifies it."""

    principal: Principal
    api_key: str


def _record(principal_id: str, username: str, role: Role, permissions: Iterable[str], api_key: str) -> PrincipalRecord:
    return PrincipalRecord(
        principal=Principal(id=principal_id, username=username, role=role, permissions=frozenset(permissions)),
        api_key=api_key,
    )


DEFAULT_PRINCIPALS: List[PrincipalRecord] = [
    _record("user_1", "admin", Role.ADMIN, ["read", "write", "delete", "manage"], "admin-api-key-123456"),
    _record("user_2", "bartender", Role.MODERATOR, ["read", "write"], "bartender-api-key-789012"),
    _record("user_3", "customer", Role.USER, ["read"], "customer-api-key-345678"),
]


class PrincipalRegistry:
    """
    Read-only lookup tables over a fixed list of principals.

    Raises ValueError on construction if two records share an id, a username
    or an API key, since credentials must map 1:1 to principals.
    """

    def __init__(self, records: Iterable[PrincipalRecord]):
        self._records = list(records)
        self._by_api_key: Dict[str, PrincipalRecord] = {}
        self._by_id: Dict[str, PrincipalRecord] = {}
        self._by_username: Dict[str, PrincipalRecord] = {}

        for record in self._records:
            for index, key in (
                (self._by_api_key, record.api_key),
                (self._by_id, record.principal.id),
                (self._by_username, record.principal.username),
            ):
                if key in index:
                    raise ValueError(f"Duplicate principal key: {key!r}")
                index[key] = record

    @classmethod
    def default(cls) -> "PrincipalRegistry":
        return cls(DEFAULT_PRINCIPALS)

    def __len__(self) -> int:
        return len(self._records)

    def find_by_api_key(self, api_key: str) -> Optional[Principal]:
        record = self._by_api_key.get(api_key)
        return record.principal if record else None

    def find_by_id(self, principal_id: str) -> Optional[Principal]:
        record = self._by_id.get(principal_id)
        return record.principal if record else None

    def find_by_username(self, username: str) -> Optional[Principal]:
        record = self._by_username.get(username)
        return record.principal if record else None

    def api_key_for(self, username: str) -> Optional[str]:
        record = self._by_username.get(username)
        return record.api_key if record else None

    def token_for(self, username: str) -> Optional[str]:
        """Mock bearer token for `username`; no signature, no expiry."""
        record = self._by_username.get(username)
        return f"{TOKEN_PREFIX}{record.principal.id}" if record else None

    def principals(self) -> List[Principal]:
        return [record.principal for record in self._records]
