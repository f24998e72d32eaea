"""
Pytest fixtures for testing
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.config import get_settings
from app.infrastructure.db.session import Base
from app.infrastructure.db import models  # noqa: F401  (registers tables)
from app.infrastructure.db.ledger_store import SqlLedgerStore
from app.infrastructure.memory.ledger_store import InMemoryLedgerStore


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared by every thread (TestClient runs sync routes in a pool)"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def sample_account_id():
    """Sample account ID for tests"""
    return 1


@pytest.fixture
def memory_store():
    return InMemoryLedgerStore()


@pytest.fixture
def sql_store(db_session):
    return SqlLedgerStore(db_session)


@pytest.fixture(params=["memory", "sql"])
def store(request, db_session):
    """Run a test against both LedgerStore implementations"""
    if request.param == "memory":
        return InMemoryLedgerStore()
    return SqlLedgerStore(db_session)


@pytest.fixture
def server_clock(monkeypatch):
    """Settings without TIMEZONE: "today" follows the server clock"""
    monkeypatch.delenv("TIMEZONE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
