"""
Database engine, session factory and request-scoped session dependency.

The engine is owned by a Database handle that the application creates at startup
and disposes at shutdown. Every request borrows one pooled connection through
get_db and gives it back when the request finishes, whatever the outcome.
"""

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Owns the SQLAlchemy engine and session factory for one application."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine = create_engine(settings.database_url, **self._engine_options(settings))
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @staticmethod
    def _engine_options(settings: Settings) -> dict:
        url = settings.database_url
        if url.startswith("sqlite"):
            # In-memory SQLite must share one connection across threads
            options = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url or url.rstrip("/") == "sqlite:":
                options["poolclass"] = StaticPool
            return options

        return {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
        }

    def create_tables(self) -> None:
        """Create any missing tables for the registered models."""
        # Registers every model on Base.metadata
        import app.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        """Run a trivial query to confirm the database is reachable."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database ping failed: {str(e)}")
            return False

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()
        logger.info("🛑 Database connection pool disposed")


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Yield a database session for the current request.

    The session is closed on every exit path, returning its connection to the pool.
    """
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
