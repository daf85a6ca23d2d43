"""Closed catalogue of SQL statements the record store may execute.

Statement text is a ``LiteralString``: it is written in this module and never
assembled from request data. Values always travel separately as bound
parameters. ``RecordStore`` refuses any statement object that is not listed
in ``CATALOGUE``.
"""

from dataclasses import dataclass
from typing import LiteralString

from resource_gateway.exceptions import ConfigurationError


@dataclass(frozen=True)
class Statement:
    """A named, parameterized SQL command.

    Attributes:
        name: Identifier used in log records (never the SQL text).
        sql: Command text with ``?`` placeholders.
        arity: Number of ``?`` placeholders, i.e. parameters to bind.
    """

    name: str
    sql: LiteralString

    @property
    def arity(self) -> int:
        return self.sql.count("?")

    def check_params(self, params: tuple[object, ...]) -> None:
        """Raise ConfigurationError unless params match the placeholders."""
        if not isinstance(params, tuple):
            raise ConfigurationError(
                f"Statement {self.name!r} parameters must be a tuple, "
                f"got {type(params).__name__}"
            )
        if len(params) != self.arity:
            raise ConfigurationError(
                f"Statement {self.name!r} takes {self.arity} parameter(s), got {len(params)}"
            )


# Schema. Executed once per store, without parameters.
SCHEMA: tuple[Statement, ...] = (
    Statement(
        "create_users",
        "CREATE TABLE users ("
        " id INTEGER PRIMARY KEY,"
        " username TEXT NOT NULL UNIQUE,"
        " name TEXT NOT NULL,"
        " role TEXT NOT NULL CHECK (role IN ('customer', 'support')),"
        " department TEXT NOT NULL,"
        " email TEXT NOT NULL,"
        " password_hash TEXT NOT NULL)",
    ),
    Statement(
        "create_orders",
        "CREATE TABLE orders ("
        " id INTEGER PRIMARY KEY,"
        " owner_id INTEGER NOT NULL REFERENCES users (id),"
        " item TEXT NOT NULL,"
        " region TEXT NOT NULL,"
        " total REAL NOT NULL)",
    ),
    Statement(
        "create_transactions",
        "CREATE TABLE transactions ("
        " id INTEGER PRIMARY KEY AUTOINCREMENT,"
        " user_id INTEGER NOT NULL REFERENCES users (id),"
        " amount REAL NOT NULL,"
        " description TEXT NOT NULL)",
    ),
    Statement(
        "create_feedback",
        "CREATE TABLE feedback ("
        " id INTEGER PRIMARY KEY AUTOINCREMENT,"
        " user TEXT NOT NULL,"
        " comment TEXT NOT NULL)",
    ),
)

INSERT_USER = Statement(
    "insert_user",
    "INSERT INTO users (id, username, name, role, department, email, password_hash)"
    " VALUES (?, ?, ?, ?, ?, ?, ?)",
)
INSERT_ORDER = Statement(
    "insert_order",
    "INSERT INTO orders (id, owner_id, item, region, total) VALUES (?, ?, ?, ?, ?)",
)
INSERT_TRANSACTION = Statement(
    "insert_transaction",
    "INSERT INTO transactions (user_id, amount, description) VALUES (?, ?, ?)",
)

USER_BY_ID = Statement(
    "user_by_id",
    "SELECT id, username, name, role, department, email FROM users WHERE id = ?",
)
USER_BY_USERNAME = Statement(
    "user_by_username",
    "SELECT id, username, password_hash FROM users WHERE username = ?",
)
ORDER_BY_ID = Statement(
    "order_by_id",
    "SELECT id, owner_id, item, region, total FROM orders WHERE id = ?",
)
TRANSACTIONS_FOR_USER = Statement(
    "transactions_for_user",
    "SELECT id, amount, description FROM transactions"
    " WHERE user_id = ? AND description LIKE ? ESCAPE '\\'"
    " ORDER BY id DESC",
)
INSERT_FEEDBACK = Statement(
    "insert_feedback",
    "INSERT INTO feedback (user, comment) VALUES (?, ?)",
)
LIST_FEEDBACK = Statement(
    "list_feedback",
    "SELECT user, comment FROM feedback ORDER BY id DESC",
)
UPDATE_EMAIL = Statement(
    "update_email",
    "UPDATE users SET email = ? WHERE id = ?",
)

CATALOGUE: frozenset[Statement] = frozenset(
    {
        *SCHEMA,
        INSERT_USER,
        INSERT_ORDER,
        INSERT_TRANSACTION,
        USER_BY_ID,
        USER_BY_USERNAME,
        ORDER_BY_ID,
        TRANSACTIONS_FOR_USER,
        INSERT_FEEDBACK,
        LIST_FEEDBACK,
        UPDATE_EMAIL,
    }
)
