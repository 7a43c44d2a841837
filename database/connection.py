"""
Database connection and session management.
"""
from contextlib import contextmanager
from typing import Generator
from urllib.parse import urlparse
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from config.settings import settings
from .models import Base


def _ensure_database_exists():
    """Create the MySQL database if it does not already exist."""
    parsed = urlparse(settings.database_url)
    db_name = parsed.path.lstrip("/")
    # Build a URL without the database name so we can connect to the server
    server_url = settings.database_url.rsplit("/", 1)[0]
    tmp_engine = create_engine(server_url, pool_pre_ping=True)
    with tmp_engine.connect() as conn:
        conn.execute(text(f"CREATE DATABASE IF NOT EXISTS `{db_name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"))
        conn.commit()
    tmp_engine.dispose()


def _engine_kwargs() -> dict:
    kwargs = {"pool_pre_ping": True, "echo": settings.debug}
    if settings.database_url.startswith("sqlite"):
        # FastAPI serves requests from a thread pool
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_recycle"] = 3600
    return kwargs


if settings.database_url.startswith("mysql"):
    _ensure_database_exists()

# Create engine
engine = create_engine(settings.database_url, **_engine_kwargs())

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Initialize database by creating all tables."""
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Get database session.
    Use as dependency injection in FastAPI.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context():
    """
    Context manager for database session.
    Use for non-FastAPI contexts.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
