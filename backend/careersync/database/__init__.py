"""
Database engine, session factory, and metadata shared across the application.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool

from careersync.core.config import settings

logger = logging.getLogger(__name__)


def _build_engine_kwargs(db_url: str) -> dict[str, Any]:
    """Engine options per dialect: busy timeout for SQLite, a bounded pool elsewhere."""
    if db_url.startswith("sqlite"):
        return {
            "connect_args": {
                "check_same_thread": False,
                "timeout": settings.sqlite_busy_timeout_seconds,
            },
        }
    return {
        "poolclass": QueuePool,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
        "pool_pre_ping": True,
    }


def _install_sqlite_transaction_hooks(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first DML statement, which breaks
    # SAVEPOINT and lets reads escape the transaction. Take over BEGIN.
    # IMMEDIATE takes the write lock up front, so concurrent writers wait on
    # the busy timeout instead of failing when a read lock cannot be upgraded.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    @event.listens_for(engine, "begin")
    def _emit_begin(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def _install_pool_logging(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
        connection_record.info["connect_time"] = datetime.now()
        logger.debug("Database connection established")

    @event.listens_for(engine, "checkout")
    def receive_checkout(
        dbapi_connection: Any, connection_record: Any, connection_proxy: Any
    ) -> None:
        logger.debug("Connection checked out from pool")

    @event.listens_for(engine, "checkin")
    def receive_checkin(dbapi_connection: Any, connection_record: Any) -> None:
        logger.debug("Connection returned to pool")


def create_db_engine(db_url: str) -> Engine:
    """Create an engine for ``db_url`` with the application's event hooks attached."""
    engine = create_engine(db_url, **_build_engine_kwargs(db_url))
    if engine.dialect.name == "sqlite":
        _install_sqlite_transaction_hooks(engine)
    _install_pool_logging(engine)
    return engine


engine: Engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Optional[Engine] = None) -> None:
    """Create every table known to the ORM metadata."""
    import careersync.models  # noqa: F401  registers mappers on Base

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Database tables ensured on {target.url.render_as_string(hide_password=True)}")


__all__ = [
    "Base",
    "SessionLocal",
    "create_db_engine",
    "engine",
    "get_db",
    "init_db",
]
