"""Lightweight schema migrations for SQLite databases."""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

USERS_ADDED_COLUMNS: dict[str, str] = {
    "full_name": "VARCHAR(255) NOT NULL DEFAULT ''",
    "phone_number": "VARCHAR(32) NULL",
    "updated_at": "DATETIME NULL",
}
USERS_UNIQUE_COLUMNS: tuple[str, ...] = ("email", "phone_number")


def _sqlite_column_names(connection: Connection, table_name: str) -> set[str]:
    """Return column names for a SQLite table using PRAGMA table_info."""
    rows = connection.execute(text(f"PRAGMA table_info({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def ensure_sqlite_schema(engine: Engine) -> None:
    """Apply lightweight schema updates for legacy SQLite databases."""
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as connection:
        table_rows = connection.execute(text("SELECT name FROM sqlite_master WHERE type='table';")).all()
        table_names: set[str] = {str(row[0]) for row in table_rows}
        if "users" not in table_names:
            return

        user_columns = _sqlite_column_names(connection, "users")
        for column_name, column_ddl in USERS_ADDED_COLUMNS.items():
            if column_name not in user_columns:
                connection.execute(text(f"ALTER TABLE users ADD COLUMN {column_name} {column_ddl}"))
                logger.info("[MIGRATION] Added users.%s", column_name)

        connection.execute(text("UPDATE users SET full_name = username WHERE full_name IS NULL OR full_name = ''"))
        connection.execute(text("UPDATE users SET role = lower(trim(role)) WHERE role != lower(trim(role))"))
        for column_name in USERS_UNIQUE_COLUMNS:
            connection.execute(
                text(f"CREATE UNIQUE INDEX IF NOT EXISTS uq_users_{column_name} ON users ({column_name})")
            )
