# tests/conftest.py
from __future__ import annotations

import os
import random
from collections.abc import Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("OTP_BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from rps_arena.api.dependencies import get_rng
from rps_arena.core.security import create_access_token
from rps_arena.db.session import Base
from rps_arena.db.session import get_db as app_get_session
from rps_arena.main import app as fastapi_app
from rps_arena.models import User

TEST_DB_URL = "sqlite://"

_MOBILE_COUNTER = count(1)


class ScriptedRandom(random.Random):
    """Random source whose `choice` returns queued values in order."""

    def __init__(self) -> None:
        super().__init__(0)
        self.queue: list[str] = []

    def choice(self, seq):  # type: ignore[override]
        if self.queue:
            value = self.queue.pop(0)
            assert value in seq
            return value
        return super().choice(seq)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def scripted_rng() -> ScriptedRandom:
    return ScriptedRandom()


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    scripted_rng: ScriptedRandom,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_rng] = lambda: scripted_rng
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_rng, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def unique_mobile() -> str:
    """Return a fresh valid 10-digit mobile number."""
    return f"98{next(_MOBILE_COUNTER):08d}"


@pytest.fixture()
def test_user(db_session: Session) -> Iterator[User]:
    """Create and return a persisted user without a pending code."""
    user = User(mobile=unique_mobile())
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    yield user


@pytest.fixture()
def other_user(db_session: Session) -> Iterator[User]:
    """Create and return a second persisted user."""
    user = User(mobile=unique_mobile())
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    yield user


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = create_access_token(other_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def failing_commit(db_session: Session, monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Make every commit on the test session fail like a dropped connection.

    Returns the list of rollback calls so tests can check the session was
    rolled back. The real rollback is not run; pending objects are simply
    discarded when the session closes.
    """
    rollbacks: list[str] = []

    def _commit() -> None:
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    monkeypatch.setattr(db_session, "commit", _commit)
    monkeypatch.setattr(db_session, "rollback", lambda: rollbacks.append("rollback"))
    return rollbacks
