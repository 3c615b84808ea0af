"""Database seed behavior tests."""

import logging
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.db import session as db_session
from app.db.base import Base
from app.db.seed import DEMO_USERS, ensure_demo_users
from app.main import app
from app.models.user import User
from app.services.user_service import UserConflictError


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _session_factory(db_file: Path) -> sessionmaker:
    engine = _build_test_engine(db_file)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def test_ensure_demo_users_creates_users_in_dev(tmp_path: Path, monkeypatch) -> None:
    """Demo seed should fill an empty directory in development."""
    testing_session_local = _session_factory(tmp_path / "seed_dev.db")
    monkeypatch.setattr(settings, "app_env", "dev")
    monkeypatch.setattr(settings, "seed_demo_users", True)
    monkeypatch.setattr("app.services.user_service.get_password_hash", lambda _: "hashed-demo-password")

    with testing_session_local() as session:
        created = ensure_demo_users(session)

    assert created == len(DEMO_USERS)
    with testing_session_local() as session:
        users = session.scalars(select(User).order_by(User.id)).all()
        assert [user.username for user in users] == [str(item["username"]) for item in DEMO_USERS]
        assert all(user.password_hash == "hashed-demo-password" for user in users)


def test_ensure_demo_users_skips_non_empty_directory(tmp_path: Path, monkeypatch) -> None:
    """Demo seed should leave an existing directory untouched."""
    testing_session_local = _session_factory(tmp_path / "seed_existing.db")
    monkeypatch.setattr(settings, "app_env", "dev")
    monkeypatch.setattr(settings, "seed_demo_users", True)

    with testing_session_local() as session:
        session.add(
            User(full_name="Existing", username="existing", phone_number="01", password_hash="hash", role="employee")
        )
        session.commit()
        created = ensure_demo_users(session)

    assert created == 0
    with testing_session_local() as session:
        assert session.scalar(select(func.count(User.id))) == 1


def test_ensure_demo_users_skips_creation_in_non_dev(tmp_path: Path, monkeypatch) -> None:
    """Demo seed should not create users outside development."""
    testing_session_local = _session_factory(tmp_path / "seed_prod.db")
    monkeypatch.setattr(settings, "app_env", "prod")

    with testing_session_local() as session:
        assert ensure_demo_users(session) == 0

    with testing_session_local() as session:
        assert session.scalar(select(func.count(User.id))) == 0


def test_startup_creates_schema_and_seeds_demo_users(tmp_path: Path, monkeypatch) -> None:
    """App startup should create tables and seed the demo directory."""
    engine = _build_test_engine(tmp_path / "startup.db")
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", sessionmaker(autocommit=False, autoflush=False, bind=engine))
    monkeypatch.setattr(settings, "app_env", "dev")
    monkeypatch.setattr(settings, "seed_demo_users", True)

    with TestClient(app) as client:
        response = client.get("/api/v1/users/preview")

    assert response.status_code == 200
    assert {item["username"] for item in response.json()} == {str(item["username"]) for item in DEMO_USERS}


def test_ensure_demo_users_logs_tagged_warning_on_conflict(tmp_path: Path, monkeypatch, caplog) -> None:
    """A conflicting demo user is skipped with a tagged warning."""
    testing_session_local = _session_factory(tmp_path / "seed_conflict.db")
    monkeypatch.setattr(settings, "app_env", "dev")
    monkeypatch.setattr(settings, "seed_demo_users", True)

    def _conflicting_create_user(db, **fields):
        raise UserConflictError("Username, email or phone number already exists")

    monkeypatch.setattr("app.db.seed.create_user", _conflicting_create_user)
    caplog.set_level(logging.WARNING, logger="app.db.seed")

    with testing_session_local() as session:
        assert ensure_demo_users(session) == 0

    skipped = [record.getMessage() for record in caplog.records if "Skipping demo user" in record.getMessage()]
    assert len(skipped) == len(DEMO_USERS)
    assert all(message.startswith("[SEED] ") for message in skipped)
