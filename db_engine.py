"""
Database engine and session management for LedgerDesk.
Uses SQLModel with SQLite for persistent storage.
Features Write-Ahead Logging (WAL) mode for improved concurrency.

The engine is created once at start-up and handed to every repository and
service explicitly; this module keeps no engine of its own.
"""

from pathlib import Path
from typing import Optional
import logging

from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel, Session, create_engine

from config import Settings, get_settings
from errors import IoError

logger = logging.getLogger(__name__)


def create_db_engine(settings: Optional[Settings] = None) -> Engine:
    """
    Create a database engine configured for concurrent access.

    Args:
        settings: Optional settings; defaults to the global settings

    Returns:
        SQLAlchemy Engine ready to be injected into repositories
    """
    settings = settings or get_settings()
    connect_args = {}

    if settings.is_sqlite:
        _ensure_sqlite_directory(settings.database_url)
        connect_args["check_same_thread"] = False  # Allow use across threads

    engine = create_engine(
        settings.database_url,
        echo=settings.db_echo,
        connect_args=connect_args
    )

    if settings.is_sqlite:
        _install_sqlite_pragmas(engine, settings.db_busy_timeout_ms)
        if settings.db_enable_wal:
            _enable_wal_mode(engine)

    return engine


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    database = make_url(database_url).database
    if not database or database == ":memory:":
        return

    try:
        Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IoError(e) from e


def _install_sqlite_pragmas(engine: Engine, busy_timeout_ms: int) -> None:
    """Apply per-connection pragmas: foreign keys for cascades, busy timeout for writers."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
        cursor.close()


def _enable_wal_mode(engine: Engine) -> None:
    """Enable SQLite WAL mode for improved concurrent read/write performance."""
    try:
        with engine.connect() as conn:
            conn.exec_driver_sql("PRAGMA journal_mode=WAL")
            logger.info("SQLite WAL mode enabled for concurrent access")
    except Exception as e:
        logger.warning(f"Could not enable WAL mode: {e}")


def init_db(engine: Engine) -> None:
    """Initialize the database and create all tables."""
    from models import Customer, Product, TaxInvoice, Transaction, TransactionItem  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database initialized")


def get_session(engine: Engine) -> Session:
    """Get a new database session."""
    return Session(engine)
