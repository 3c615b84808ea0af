"""User service operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import get_password_hash
from app.models.user import User, normalize_user_role

logger = logging.getLogger(__name__)

USER_PREVIEW_LIMIT: int = 10
FETCH_USERS_FAILED_MESSAGE: str = "Failed to fetch users from the database."
DUPLICATE_USER_MESSAGE: str = "Username, email or phone number already exists"


class UserFetchError(Exception):
    """Raised to callers when the user list cannot be read.

    The message is always the generic text; the database error only goes to the log.
    """

    def __init__(self, message: str = FETCH_USERS_FAILED_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class UserNotFoundError(Exception):
    """Raised when a user id does not exist."""


class UserConflictError(Exception):
    """Raised when username, email or phone number is already taken."""


@dataclass(frozen=True)
class UserFetchFailure:
    """Tagged failure value: the underlying cause for logs, a fixed message for callers."""

    cause: SQLAlchemyError
    message: str = FETCH_USERS_FAILED_MESSAGE


@dataclass(frozen=True)
class UserFetchResult:
    """Either the fetched user records or a :class:`UserFetchFailure`."""

    records: list[dict[str, Any]] = field(default_factory=list)
    failure: UserFetchFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> list[dict[str, Any]]:
        """Return records or raise :class:`UserFetchError` with the generic message."""
        if self.failure is not None:
            raise UserFetchError(self.failure.message) from None
        return self.records


def _rollback_after_failure(db: Session) -> None:
    try:
        db.rollback()
    except SQLAlchemyError as exc:
        logger.debug("[USERS] Rollback after failed read also failed: %s", exc)


def fetch_users(db: Session) -> UserFetchResult:
    """Read up to ``USER_PREVIEW_LIMIT`` users in store order.

    Rows are returned as plain mappings with ``id``, ``full_name``, ``username``,
    ``email`` and ``role``. Any database error is logged once and turned into a
    generic failure; nothing is written to the store.
    """
    statement = select(User.id, User.full_name, User.username, User.email, User.role).limit(USER_PREVIEW_LIMIT)
    try:
        rows = db.execute(statement).mappings().all()
    except SQLAlchemyError as exc:
        logger.exception("[USERS] Failed to fetch users: %s", exc)
        _rollback_after_failure(db)
        return UserFetchResult(failure=UserFetchFailure(cause=exc))
    return UserFetchResult(records=[dict(row) for row in rows])


def list_users(db: Session) -> list[dict[str, Any]]:
    """Return the full directory ordered by id, including phone numbers."""
    statement = select(
        User.id, User.full_name, User.username, User.email, User.phone_number, User.role
    ).order_by(User.id)
    try:
        rows = db.execute(statement).mappings().all()
    except SQLAlchemyError as exc:
        logger.exception("[USERS] Failed to list users: %s", exc)
        _rollback_after_failure(db)
        raise UserFetchError() from None
    return [dict(row) for row in rows]


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username.strip()).limit(1))


def _commit_or_conflict(db: Session, action: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("[USERS] %s rejected by unique constraint: %s", action, exc.orig)
        raise UserConflictError(DUPLICATE_USER_MESSAGE) from exc


def create_user(
    db: Session,
    *,
    full_name: str,
    username: str,
    password: str,
    role: str,
    phone_number: str,
    email: str | None = None,
) -> User:
    canonical_role = normalize_user_role(role)
    user = User(
        full_name=full_name.strip(),
        username=username.strip(),
        email=(email or "").strip() or None,
        phone_number=phone_number.strip(),
        password_hash=get_password_hash(password),
        role=canonical_role,
    )
    db.add(user)
    _commit_or_conflict(db, "Create")
    db.refresh(user)
    logger.info("[USERS] Created user_id=%s role=%s", user.id, user.role)
    return user


def update_user(
    db: Session,
    user_id: int,
    *,
    full_name: str,
    username: str,
    role: str,
    phone_number: str,
    email: str | None = None,
) -> User:
    canonical_role = normalize_user_role(role)
    user = get_user_by_id(db, user_id)
    if user is None:
        raise UserNotFoundError(f"User {user_id} not found")

    user.full_name = full_name.strip()
    user.username = username.strip()
    user.email = (email or "").strip() or None
    user.phone_number = phone_number.strip()
    user.role = canonical_role
    user.updated_at = datetime.now(timezone.utc)
    _commit_or_conflict(db, "Update")
    db.refresh(user)
    logger.info("[USERS] Updated user_id=%s", user.id)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user_by_id(db, user_id)
    if user is None:
        raise UserNotFoundError(f"User {user_id} not found")
    db.delete(user)
    db.commit()
    logger.info("[USERS] Deleted user_id=%s", user_id)
