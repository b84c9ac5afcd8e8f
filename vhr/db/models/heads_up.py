from sqlalchemy import Column, String, DateTime, Boolean, Integer, Text

from .base import Base, SoftDeleteMixin


class HeadsUp(SoftDeleteMixin, Base):
    """Notification schedule configuration; nothing in the service executes it."""
    __tablename__ = 'heads_up'
    name = Column(String(255), nullable=False)
    module = Column(String(100), nullable=False, index=True)
    enabled = Column(Boolean, nullable=False, default=True)
    rule = Column(Text, nullable=True)
    frequency = Column(String(50), nullable=False)
    time_of_day = Column(String(10), nullable=True)
    time_zone = Column(String(64), nullable=True)
    # 'active' | 'inactive'
    status = Column(String(16), nullable=False, default='active', index=True)
    next_run_date = Column(DateTime(timezone=True), nullable=True)
    last_run_date = Column(DateTime(timezone=True), nullable=True)
    rows_in_email = Column(Integer, nullable=False, default=0)
    content_type = Column(String(50), nullable=True)
    results_grouped = Column(String(50), nullable=True)
