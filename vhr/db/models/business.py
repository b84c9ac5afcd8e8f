from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship

from .base import Base, SoftDeleteMixin


class BusinessType(SoftDeleteMixin, Base):
    __tablename__ = 'business_types'
    name = Column(String(255), nullable=False, index=True)


class BusinessEntity(SoftDeleteMixin, Base):
    __tablename__ = 'business_entities'
    name = Column(String(255), nullable=False, index=True)


class BusinessPracticeArea(SoftDeleteMixin, Base):
    __tablename__ = 'business_practice_areas'
    name = Column(String(255), nullable=False, index=True)


# Taxonomy children reference their parents by plain integer ids; joins
# are resolved at read time only.
class Subcategory(SoftDeleteMixin, Base):
    __tablename__ = 'subcategories'
    title = Column(String(255), nullable=False, index=True)
    practice_area_id = Column(Integer, nullable=False, index=True)


class CustomFieldGroup(SoftDeleteMixin, Base):
    __tablename__ = 'custom_field_groups'
    title = Column(String(255), nullable=False, index=True)
    subcategory_id = Column(Integer, nullable=True, index=True)
    linked_to = Column(String(255), nullable=True)

    fields = relationship(
        "CustomField",
        primaryjoin="and_(CustomFieldGroup.id == foreign(CustomField.field_group_id), CustomField.is_delete.is_(False))",
        order_by="CustomField.id",
        viewonly=True,
    )


class CustomField(SoftDeleteMixin, Base):
    __tablename__ = 'custom_fields'
    title = Column(String(255), nullable=False, index=True)
    practice_area_id = Column(Integer, nullable=True, index=True)
    field_group_id = Column(Integer, nullable=True, index=True)
    template_keyword = Column(String(255), nullable=True)
    type = Column(String(32), nullable=False, default='text')
