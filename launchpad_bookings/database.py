"""
Database engine and session management for the bookings store.

PostgreSQL is the deployment target; SQLite URLs are accepted for local runs
and tests and get a plain engine without the server pool settings.
"""
import os
import logging
from typing import Any, Dict, Generator, Optional
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool

from launchpad_bookings.models.database import Base

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class DatabaseConfig:
    """Connection settings, from an explicit URL or DATABASE_URL / DB_* variables."""

    def __init__(self, database_url: Optional[str] = None):
        url = database_url or os.getenv("DATABASE_URL") or self._url_from_parts()
        # Heroku-style URLs use the scheme SQLAlchemy 1.4+ no longer accepts
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        self.database_url = url

        self.echo = _env_flag("DB_ECHO", "false")
        self.pool_size = int(os.getenv("DB_POOL_SIZE", "10"))
        self.max_overflow = int(os.getenv("DB_MAX_OVERFLOW", "20"))
        self.pool_timeout = int(os.getenv("DB_POOL_TIMEOUT", "30"))
        self.pool_recycle = int(os.getenv("DB_POOL_RECYCLE", "3600"))
        self.pool_pre_ping = _env_flag("DB_POOL_PRE_PING", "true")

    @staticmethod
    def _url_from_parts() -> str:
        return "postgresql://{user}:{password}@{host}:{port}/{name}".format(
            user=os.getenv("DB_USER", "postgres"),
            password=os.getenv("DB_PASSWORD", "postgres"),
            host=os.getenv("DB_HOST", "localhost"),
            port=os.getenv("DB_PORT", "5432"),
            name=os.getenv("DB_NAME", "bookings"),
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def safe_url(self) -> str:
        """The URL with its password masked, for logs."""
        return make_url(self.database_url).render_as_string(hide_password=True)

    def engine_options(self) -> Dict[str, Any]:
        """Keyword arguments for create_engine."""
        if self.is_sqlite:
            return {
                "echo": self.echo,
                "connect_args": {"check_same_thread": False},
            }
        return {
            "echo": self.echo,
            "poolclass": QueuePool,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": self.pool_pre_ping,
            "connect_args": {
                "options": "-c timezone=utc",
                "application_name": "launchpad_bookings",
            },
        }


class DatabaseManager:
    """Owns the engine and hands out sessions for the bookings database."""

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self._engine: Optional[Engine] = create_engine(
            self.config.database_url, **self.config.engine_options()
        )
        self._session_factory: Optional[sessionmaker] = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False
        )
        logger.info(f"Database engine created for {self.config.safe_url}")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database engine not initialized")
        return self._engine

    def get_session(self) -> Session:
        """Open a new session; the caller commits and closes it."""
        if self._session_factory is None:
            raise RuntimeError("Session factory not initialized")
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Session committed on success and rolled back on error."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """Create the bookings schema if it does not exist."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ready")

    def check_connection(self) -> bool:
        """Return True when the database answers SELECT 1."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def close(self) -> None:
        """Dispose of pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database engine disposed")


_db_manager: Optional[DatabaseManager] = None


def configure_database(config: DatabaseConfig) -> DatabaseManager:
    """Replace the process-wide manager with one built from config."""
    global _db_manager
    if _db_manager is not None:
        _db_manager.close()
    _db_manager = DatabaseManager(config)
    return _db_manager


def get_database_manager() -> DatabaseManager:
    """Process-wide manager, created from the environment on first use."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def get_db_session() -> Session:
    return get_database_manager().get_session()


def init_database() -> None:
    get_database_manager().create_tables()


def close_database() -> None:
    global _db_manager
    if _db_manager is not None:
        _db_manager.close()
        _db_manager = None
