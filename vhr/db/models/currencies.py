from sqlalchemy import Column, String, Boolean, Integer, Float

from .base import Base, SoftDeleteMixin


class Currency(SoftDeleteMixin, Base):
    __tablename__ = 'currencies'
    customer_id = Column(Integer, nullable=True, index=True)
    currency_code = Column(String(10), nullable=False, index=True)
    currency_name = Column(String(100), nullable=False)
    currency_symbol = Column(String(10), nullable=False)
    exchange_rate = Column(Float, nullable=False, default=1)
    is_crypto = Column(Boolean, nullable=False, default=False)
    usd_price = Column(Float, nullable=False, default=0)
