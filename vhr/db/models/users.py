from sqlalchemy import Column, String, DateTime, Boolean, Integer, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship

from .base import Base, SoftDeleteMixin


class UserGroup(SoftDeleteMixin, Base):
    __tablename__ = 'user_groups'
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    # One level per fixed module, see vhr.utils.role_permissions.DEFAULT_PERMISSIONS
    permissions = Column(JSON, nullable=False)
    # List of {"module": str, "level": str} overrides
    custom_permissions = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)

    users = relationship("User", back_populates="user_group")


class User(SoftDeleteMixin, Base):
    __tablename__ = 'users'
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    password = Column(String(255), nullable=False)
    # 'user' | 'super_admin'
    role = Column(String(32), nullable=False, default='user')
    otp = Column(String(255), nullable=True)
    otp_expiry = Column(DateTime(timezone=True), nullable=True)
    user_group_id = Column(Integer, ForeignKey('user_groups.id'), nullable=True, index=True)

    user_group = relationship("UserGroup", back_populates="users")
