"""
Shared SQLAlchemy base and column helpers.
"""
from datetime import datetime, UTC

from sqlalchemy import Boolean, Column, DateTime, Integer
from sqlalchemy.orm import declarative_base


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


Base = declarative_base()


class TimestampMixin:
    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)


class SoftDeleteMixin(TimestampMixin):
    # Rows flagged here are hidden from every default get/list query.
    is_delete = Column(Boolean, nullable=False, default=False, index=True)
