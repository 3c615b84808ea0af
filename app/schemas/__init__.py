"""Schema exports."""

from app.schemas.user import UserCreate, UserRead, UserRecord, UserUpdate

__all__ = ["UserCreate", "UserRead", "UserRecord", "UserUpdate"]
