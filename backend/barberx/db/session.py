import json
import logging
import os

from flask import g, has_app_context
from sqlalchemy import create_engine, text
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()

# Internal lazy globals
_engine = None
_SessionLocal = None
_database_url = None


def _json_serializer(value) -> str:
    # Keep non-ASCII text as-is so ilike over JSON columns can match it
    return json.dumps(value, ensure_ascii=False)


def _build_engine(database_url: str):
    url = make_url(database_url)

    if url.drivername.startswith("postgres"):
        return create_engine(
            database_url,
            json_serializer=_json_serializer,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=3600,
            connect_args={"application_name": "barberx", "connect_timeout": 10},
        )

    if url.drivername.startswith("sqlite") and url.database in (None, "", ":memory:"):
        # One shared in-memory database across the process so DDL persists
        # across connections
        return create_engine(
            database_url,
            json_serializer=_json_serializer,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if url.drivername.startswith("sqlite"):
        return create_engine(
            database_url,
            json_serializer=_json_serializer,
            connect_args={"check_same_thread": False},
        )

    return create_engine(database_url, json_serializer=_json_serializer)


def get_engine():
    """Return a cached SQLAlchemy engine, creating it from DATABASE_URL on
    first call. This allows tests to set DATABASE_URL before the engine is
    constructed."""
    global _engine, _SessionLocal, _database_url
    database_url = os.getenv("DATABASE_URL", "sqlite:///./barberx.db")

    if _engine is None or _database_url != database_url:
        if _engine is not None:
            _engine.dispose()
        _engine = _build_engine(database_url)
        _SessionLocal = None
        _database_url = database_url
        logger.debug(
            "SQLAlchemy engine created",
            extra={"context": {"dialect": _engine.dialect.name}},
        )
    return _engine


def get_sessionmaker():
    """Return a cached sessionmaker bound to the lazy engine."""
    global _SessionLocal
    engine = get_engine()
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )
    return _SessionLocal


def SessionLocal():
    """Return a new Session instance bound to the lazy engine."""
    return get_sessionmaker()()


def get_request_session():
    """Return the Session shared by the current request.

    Outside a Flask app context a fresh session is returned; the caller owns it.
    """
    if not has_app_context():
        return SessionLocal()
    if "db_session" not in g:
        g.db_session = SessionLocal()
    return g.db_session


def close_request_session(exception=None):
    """Teardown hook: roll back on error and close the request session."""
    db = g.pop("db_session", None)
    if db is None:
        return
    if exception is not None:
        db.rollback()
    db.close()


def create_tables():
    """Create all tables in database using the lazy engine."""
    # Models must be imported so Base.metadata is populated
    from barberx.db import base  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def drop_tables():
    from barberx.db import base  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())


def check_database_connection() -> bool:
    """Run ``SELECT 1`` against the configured database."""
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(
            "Database connection failed",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return False
