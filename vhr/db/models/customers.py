from sqlalchemy import Column, String, DateTime, Boolean, Integer, Text, JSON

from .base import Base, SoftDeleteMixin, TimestampMixin


class Customer(SoftDeleteMixin, Base):
    __tablename__ = 'customers'
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    business_name = Column(String(255), nullable=False)
    trading_name = Column(String(255), nullable=True)
    subscription = Column(String(255), nullable=True)
    note = Column(Text, nullable=True)
    business_size = Column(Integer, nullable=True)
    business_entity = Column(String(255), nullable=True)
    business_type = Column(String(255), nullable=True, index=True)
    phone_number = Column(String(15), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    password = Column(String(255), nullable=False)
    practice_area = Column(JSON, nullable=False, default=list)
    # 'Active' | 'Trial' | 'License Expired' | 'Free'
    status = Column(String(32), nullable=False, default='Free', index=True)
    expiry_date = Column(DateTime(timezone=True), nullable=True)


class CustomerVerification(TimestampMixin, Base):
    __tablename__ = 'customer_verifications'
    email = Column(String(255), nullable=False, unique=True, index=True)
    email_otp = Column(String(16), nullable=True)
    email_otp_expiry = Column(DateTime(timezone=True), nullable=True)
    is_email_verified = Column(Boolean, nullable=False, default=False)
