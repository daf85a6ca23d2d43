"""SQLite-backed record store.

One in-memory database per store, created at application startup and handed
to handlers through ``app.state``. Every public operation is a coroutine that
runs the blocking sqlite3 call in a worker thread, so a handler's response is
only produced after its store operations have settled.
"""

import asyncio
import logging
import sqlite3
import threading
from collections.abc import Iterable
from typing import Any

from resource_gateway.core.passwords import hash_password
from resource_gateway.exceptions import ConfigurationError, InternalStoreError, NotFound
from resource_gateway.models import Credential, Feedback, Order, Transaction, User
from resource_gateway.store import seed, statements
from resource_gateway.store.statements import CATALOGUE, Statement

logger = logging.getLogger(__name__)

_FETCH_ONE = "one"
_FETCH_ALL = "all"
_EXECUTE = "execute"

# SQLite INTEGER is a signed 64-bit value
MAX_ROW_ID = 2**63 - 1


def _is_row_id(value: int) -> bool:
    return 0 <= value <= MAX_ROW_ID


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so text matches literally (ESCAPE '\\')."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class RecordStore:
    """Users, orders, transactions, and feedback behind parameterized commands.

    Only statements from ``statements.CATALOGUE`` can be executed, and only
    with a parameter tuple whose length matches the statement's placeholders.

    Example:
        store = RecordStore.open(demo_password="password123")
        order = await store.get_order(1)
        store.close()
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def open(
        cls,
        *,
        demo_password: str,
        users: Iterable[seed.SeedUser] = seed.USERS,
        orders: Iterable[seed.SeedOrder] = seed.ORDERS,
        transactions: Iterable[seed.SeedTransaction] = seed.TRANSACTIONS,
    ) -> "RecordStore":
        """Create an in-memory store with the schema and demo records loaded.

        Raises:
            ConfigurationError: If an order references a user that does not exist.
        """
        users = tuple(users)
        orders = tuple(orders)
        seed.check_references(users, orders)

        connection = sqlite3.connect(":memory:", check_same_thread=False)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        store = cls(connection)

        for statement in statements.SCHEMA:
            store._run(statement, (), _EXECUTE)
        for user in users:
            store._run(
                statements.INSERT_USER,
                (
                    user.id,
                    user.username,
                    user.name,
                    user.role,
                    user.department,
                    user.email,
                    hash_password(demo_password),
                ),
                _EXECUTE,
            )
        for order in orders:
            store._run(
                statements.INSERT_ORDER,
                (order.id, order.owner_id, order.item, order.region, order.total),
                _EXECUTE,
            )
        for tx in transactions:
            store._run(
                statements.INSERT_TRANSACTION,
                (tx.user_id, tx.amount, tx.description),
                _EXECUTE,
            )
        connection.commit()

        logger.info(
            "Record store ready",
            extra={"users": len(users), "orders": len(orders)},
        )
        return store

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        with self._lock:
            self._connection.close()
            self._closed = True

    # --- users ---

    async def get_user(self, user_id: int) -> User | None:
        if not _is_row_id(user_id):
            return None
        row = await self._call(statements.USER_BY_ID, (user_id,), _FETCH_ONE)
        if row is None:
            return None
        return User(
            id=row["id"],
            username=row["username"],
            name=row["name"],
            role=row["role"],
            department=row["department"],
            email=row["email"],
        )

    async def find_credential(self, username: str) -> Credential | None:
        """Look a login up by exact username."""
        row = await self._call(statements.USER_BY_USERNAME, (username,), _FETCH_ONE)
        if row is None:
            return None
        return Credential(
            user_id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
        )

    async def update_email(self, user_id: int, email: str) -> None:
        """Replace a user's email address.

        Raises:
            NotFound: If no user has this id.
        """
        changed = await self._call(statements.UPDATE_EMAIL, (email, user_id), _EXECUTE)
        if changed == 0:
            raise NotFound("User not found")

    # --- orders ---

    async def get_order(self, order_id: int) -> Order | None:
        if not _is_row_id(order_id):
            return None
        row = await self._call(statements.ORDER_BY_ID, (order_id,), _FETCH_ONE)
        if row is None:
            return None
        return Order(
            id=row["id"],
            owner_id=row["owner_id"],
            item=row["item"],
            region=row["region"],
            total=row["total"],
        )

    # --- transactions ---

    async def list_transactions(self, user_id: int, query: str = "") -> list[Transaction]:
        """Return a user's transactions whose description contains query, newest first."""
        rows = await self._call(
            statements.TRANSACTIONS_FOR_USER,
            (user_id, f"%{escape_like(query)}%"),
            _FETCH_ALL,
        )
        return [
            Transaction(id=row["id"], amount=row["amount"], description=row["description"])
            for row in rows
        ]

    # --- feedback ---

    async def add_feedback(self, user: str, comment: str) -> None:
        await self._call(statements.INSERT_FEEDBACK, (user, comment), _EXECUTE)

    async def list_feedback(self) -> list[Feedback]:
        rows = await self._call(statements.LIST_FEEDBACK, (), _FETCH_ALL)
        return [Feedback(user=row["user"], comment=row["comment"]) for row in rows]

    # --- execution ---

    async def _call(self, statement: Statement, params: tuple[Any, ...], mode: str) -> Any:
        return await asyncio.to_thread(self._run, statement, params, mode)

    def _run(self, statement: Statement, params: tuple[Any, ...], mode: str) -> Any:
        if not isinstance(statement, Statement) or statement not in CATALOGUE:
            raise ConfigurationError(
                f"Refusing to execute a statement outside the catalogue: {statement!r}"
            )
        statement.check_params(params)

        with self._lock:
            try:
                cursor = self._connection.execute(statement.sql, params)
                if mode == _FETCH_ONE:
                    return cursor.fetchone()
                if mode == _FETCH_ALL:
                    return cursor.fetchall()
                self._connection.commit()
                return cursor.rowcount
            except sqlite3.Error as exc:
                logger.exception(
                    "Record store command failed",
                    extra={"statement": statement.name},
                )
                raise InternalStoreError() from exc
