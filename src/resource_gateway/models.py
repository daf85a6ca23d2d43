"""Records exchanged between the store, the identity layer, and handlers."""

from dataclasses import asdict, dataclass
from typing import Any

PRIVILEGED_ROLES: frozenset[str] = frozenset({"support"})
ROLES: frozenset[str] = frozenset({"customer", "support"})


@dataclass(frozen=True)
class User:
    """A resolved identity. Also the profile returned by ``/me``."""

    id: int
    username: str
    name: str
    role: str
    department: str
    email: str

    @property
    def is_privileged(self) -> bool:
        return self.role in PRIVILEGED_ROLES

    def to_json(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Credential:
    """Login lookup result. Never serialized."""

    user_id: int
    username: str
    password_hash: str


@dataclass(frozen=True)
class Order:
    id: int
    owner_id: int
    item: str
    region: str
    total: float

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "item": self.item,
            "region": self.region,
            "total": self.total,
        }


@dataclass(frozen=True)
class Transaction:
    id: int
    amount: float
    description: str

    def to_json(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Feedback:
    user: str
    comment: str

    def to_json(self) -> dict[str, Any]:
        return asdict(self)
