"""Pytest configuration and shared fixtures."""

import os
import tempfile
from datetime import datetime, timedelta

# Required configuration must exist before the app package is imported
from cryptography.fernet import Fernet

os.environ["ENV"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-signing-secret"
os.environ["FERNET_SECRET"] = Fernet.generate_key().decode()
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="clarity-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth import get_db
from app.main import create_app
from app.models.database import init_db
from app.repositories.journal_repository import SqlAlchemyJournalRepository
from app.repositories.user_repository import SqlAlchemyUserRepository
from app.services.analytics import AnalyticsEngine
from app.services.journal_store import JournalStore
from app.services.user_store import UserStore
from app.utils.passwords import PasswordHasher


class FakeClock:
    """Callable clock that tests can move by hand."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 18, 12, 0, 0))


@pytest.fixture
def user_store(db_session):
    # minimum bcrypt cost keeps the suite fast
    return UserStore(SqlAlchemyUserRepository(db_session), PasswordHasher(rounds=4))


@pytest.fixture
def journal_store(db_session, clock):
    return JournalStore(SqlAlchemyJournalRepository(db_session), clock=clock)


@pytest.fixture
def analytics_engine(db_session, clock):
    return AnalyticsEngine(SqlAlchemyJournalRepository(db_session), clock=clock)


@pytest.fixture
def alice(user_store):
    return user_store.create_user("alice@example.com", "secret-pass", "Alice", "Liddell")


@pytest.fixture
def bob(user_store):
    return user_store.create_user("bob@example.com", "hunter22", "Bob", "Builder")


@pytest.fixture
def app(session_factory):
    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
