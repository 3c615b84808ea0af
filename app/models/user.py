"""User ORM model."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

USER_ROLES = ("system_admin", "employee", "customer")


def normalize_user_role(role: str | None) -> str:
    """Return the canonical lowercase role or raise for unknown values."""
    normalized = str(role or "").strip().lower()
    if normalized not in USER_ROLES:
        raise ValueError(f"Invalid role: {role!r}. Expected one of: {', '.join(USER_ROLES)}")
    return normalized


class User(Base):
    """Directory account shown in the admin user list."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
