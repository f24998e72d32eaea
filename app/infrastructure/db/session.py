"""
Database session management (SQLAlchemy)
"""
from collections.abc import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from app.config import get_settings


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


# Singleton engine and session factory
_engine: Engine | None = None
_SessionLocal = None


def get_engine() -> Engine:
    """Get or create SQLAlchemy engine (singleton)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine(settings.get_sqlalchemy_url(), pool_pre_ping=True)
    return _engine


def get_session_factory():
    """Get or create session factory (singleton)"""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)
    return _SessionLocal


def get_db() -> Iterator[Session]:
    """
    FastAPI dependency: one short-lived session per request, always closed.

    Usage:
        @router.get("/expenses/{day}")
        def list_expenses(db: Session = Depends(get_db)):
            ...
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> None:
    """
    Readiness probe: run a trivial query through the pool.

    Raises:
        sqlalchemy.exc.OperationalError: when the database is unreachable
    """
    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))
