# Path: codelist_sync/database/models/base.py
"""
Audit Database Engine

Declarative base, engine and sessions of the optional reconciliation
audit database. The database is selected by CODELIST_SYNC_AUDIT_DATABASE_URL:

    (unset) / ':memory:'     -> SQLite in memory (tests, one-off runs)
    sqlite:///path/audit.db  -> SQLite file, parent directory created
    any other SQLAlchemy URL -> passed to create_engine() as is

One engine per process. reset_engine() disposes it so tests can
start from a clean database.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool


logger = logging.getLogger(__name__)

Base = declarative_base()

MEMORY_URL = 'sqlite:///:memory:'

_audit_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def initialize_engine(db_url: Optional[str] = None) -> None:
    """
    Create the audit engine and its session factory.

    A second call without reset_engine() keeps the existing engine.

    Args:
        db_url: SQLAlchemy URL, ':memory:' or None

    Example:
        initialize_engine(':memory:')
        initialize_engine('sqlite:////var/lib/codelist_sync/audit.db')
    """
    global _audit_engine, _session_factory

    if _audit_engine is not None:
        logger.warning(
            f"Audit database already open ({_audit_engine.url.render_as_string()}); "
            f"ignoring {db_url or MEMORY_URL}"
        )
        return

    url = make_url(MEMORY_URL if not db_url or db_url == ':memory:' else db_url)

    if url.get_backend_name() != 'sqlite':
        _audit_engine = create_engine(url, pool_pre_ping=True)
    elif url.database in (None, '', ':memory:'):
        # One shared connection, otherwise every session sees an empty database
        _audit_engine = create_engine(
            url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
        )
    else:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        _audit_engine = create_engine(url, connect_args={'check_same_thread': False})

    _session_factory = sessionmaker(bind=_audit_engine)
    logger.info(f"Audit database opened: {_audit_engine.url.render_as_string()}")


def get_engine() -> Engine:
    """
    Return the audit engine.

    Raises:
        RuntimeError: If initialize_engine() has not been called
    """
    if _audit_engine is None:
        raise RuntimeError("Audit database is not open; call initialize_engine() first")
    return _audit_engine


def get_session() -> Session:
    """
    Open a new session on the audit database.

    Raises:
        RuntimeError: If initialize_engine() has not been called
    """
    if _session_factory is None:
        raise RuntimeError("Audit database is not open; call initialize_engine() first")
    return _session_factory()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Session that commits when the block succeeds and rolls back when it raises.

    Example:
        with session_scope() as session:
            run = RunOperations.find_by_id(session, run_id)
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_all_tables() -> None:
    """Create the audit tables that do not exist yet."""
    Base.metadata.create_all(get_engine())
    logger.info(f"Audit tables ready: {', '.join(sorted(Base.metadata.tables))}")


def drop_all_tables() -> None:
    """Drop every audit table, including all recorded runs."""
    Base.metadata.drop_all(get_engine())
    logger.warning("Audit tables dropped")


def reset_engine() -> None:
    """Dispose the audit engine so initialize_engine() can open another database."""
    global _audit_engine, _session_factory
    if _audit_engine is not None:
        _audit_engine.dispose()
    _audit_engine = None
    _session_factory = None


def get_database_type() -> Optional[str]:
    """Dialect name of the open audit database (e.g., 'sqlite'), or None."""
    if _audit_engine is None:
        return None
    return _audit_engine.dialect.name


__all__ = [
    'Base',
    'initialize_engine',
    'get_engine',
    'get_session',
    'session_scope',
    'create_all_tables',
    'drop_all_tables',
    'reset_engine',
    'get_database_type',
]
