"""
Engine and session wiring.

The URL comes from ``DATABASE_URL`` or the ``POSTGRES_*`` variables. Test
runs (``VHR_TEST_DB`` set, or pytest detected) use SQLite instead; the
schema for SQLite is created on first use, Postgres is migrated by Alembic.
"""
import os
import sys
from typing import Any, Dict, Tuple

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vhr.utils.settings import database_url_from_env

IN_MEMORY_SQLITE = "sqlite+pysqlite:///:memory:"


def _running_under_pytest() -> bool:
    # PYTEST_CURRENT_TEST is unset at import time, so also look for the module
    return (
        os.getenv("PYTEST_RUNNING") == "1"
        or "PYTEST_CURRENT_TEST" in os.environ
        or "pytest" in sys.modules
    )


def _resolve_engine_config() -> Tuple[str, Dict[str, Any]]:
    test_url = os.getenv("VHR_TEST_DB")
    if test_url:
        sqlite_args = {"connect_args": {"check_same_thread": False}} if test_url.startswith("sqlite") else {}
        return test_url, sqlite_args
    if _running_under_pytest():
        # One shared connection keeps the in-memory database alive across sessions
        return IN_MEMORY_SQLITE, {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return database_url_from_env(), {"pool_pre_ping": True}


DATABASE_URL, _engine_options = _resolve_engine_config()

engine = create_engine(DATABASE_URL, **_engine_options)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

_sqlite_schema_ready = False


def _ensure_sqlite_schema() -> None:
    global _sqlite_schema_ready
    if _sqlite_schema_ready:
        return
    if engine.url.get_backend_name() == "sqlite":
        from vhr.db import models  # deferred: models import this package

        models.Base.metadata.create_all(bind=engine)
    _sqlite_schema_ready = True


def get_db():
    """Request-scoped session dependency."""
    _ensure_sqlite_schema()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
