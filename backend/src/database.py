"""Engine and session handling.

Request handlers get a session through ``get_db``. Code that runs outside a
request (the event stream body, scripts) uses ``get_db_session``, which
commits when the block finishes and rolls back when it raises.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from config import settings


def build_engine(url: str) -> Engine:
    """Create an engine; connection pool sizing is skipped for SQLite."""
    kwargs = {"pool_pre_ping": True}
    if not url.startswith("sqlite"):
        kwargs.update(pool_size=5, max_overflow=10)
    return create_engine(url, **kwargs)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a session closed after the response."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
