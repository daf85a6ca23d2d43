"""Demo records loaded into every fresh store."""

from dataclasses import dataclass

from resource_gateway.exceptions import ConfigurationError


@dataclass(frozen=True)
class SeedUser:
    id: int
    username: str
    name: str
    role: str
    department: str
    email: str


@dataclass(frozen=True)
class SeedOrder:
    id: int
    owner_id: int
    item: str
    region: str
    total: float


@dataclass(frozen=True)
class SeedTransaction:
    user_id: int
    amount: float
    description: str


USERS: tuple[SeedUser, ...] = (
    SeedUser(1, "alice", "Alice", "customer", "north", "alice@example.com"),
    SeedUser(2, "bob", "Bob", "customer", "south", "bob@example.com"),
    SeedUser(3, "charlie", "Charlie", "support", "north", "charlie@example.com"),
)

ORDERS: tuple[SeedOrder, ...] = (
    SeedOrder(1, 1, "Laptop", "north", 2000),
    SeedOrder(2, 1, "Mouse", "north", 40),
    SeedOrder(3, 2, "Monitor", "south", 300),
    SeedOrder(4, 2, "Keyboard", "south", 60),
)

TRANSACTIONS: tuple[SeedTransaction, ...] = (
    SeedTransaction(1, 25.50, "Coffee shop"),
    SeedTransaction(1, 100, "Groceries"),
)


def check_references(
    users: tuple[SeedUser, ...] = USERS,
    orders: tuple[SeedOrder, ...] = ORDERS,
) -> None:
    """Raise ConfigurationError if an order references an unknown user."""
    user_ids = {user.id for user in users}
    dangling = sorted(order.id for order in orders if order.owner_id not in user_ids)
    if dangling:
        raise ConfigurationError(f"Orders {dangling} reference users that do not exist")
