"""Database seeding helpers."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.user import User
from app.services.user_service import UserConflictError, create_user

logger = logging.getLogger(__name__)

DEMO_USERS: tuple[dict[str, str | None], ...] = (
    {
        "full_name": "System Admin",
        "username": "admin",
        "email": "admin@example.com",
        "password": "change-me",
        "role": "system_admin",
        "phone_number": "0500000001",
    },
    {
        "full_name": "Ann Lee",
        "username": "ann",
        "email": "ann@example.com",
        "password": "change-me",
        "role": "employee",
        "phone_number": "0500000002",
    },
    {
        "full_name": "Omar Said",
        "username": "omar",
        "email": None,
        "password": "change-me",
        "role": "customer",
        "phone_number": "0500000003",
    },
)


def ensure_demo_users(session: Session) -> int:
    """Populate an empty development directory with demo users.

    Returns the number of users created.
    """
    if settings.app_env != "dev" or not settings.seed_demo_users:
        return 0
    if session.scalar(select(User.id).limit(1)) is not None:
        return 0

    created = 0
    for demo_user in DEMO_USERS:
        try:
            create_user(db=session, **demo_user)
        except UserConflictError as exc:
            logger.warning("[SEED] Skipping demo user %s: %s", demo_user["username"], exc)
            continue
        created += 1
    logger.warning("[SECURITY] Seeded %s demo users with default passwords.", created)
    return created
