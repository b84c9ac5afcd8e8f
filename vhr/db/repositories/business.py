"""
Business taxonomy repository functions.

Business types, business entities and practice areas share one shape (a
unique name), so their functions take the model class. Subcategories, field
groups and custom fields support relevance-ordered title search.
"""
from __future__ import annotations

from typing import Optional, Type

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate, relevance_rank

NamedModel = Type[models.BusinessType] | Type[models.BusinessEntity] | Type[models.BusinessPracticeArea]


# Named items (types, entities, practice areas)

def get_named(db: Session, model: NamedModel, item_id: int):
    return db.query(model).filter(model.id == item_id, model.is_delete.is_(False)).first()


def get_named_by_name(db: Session, model: NamedModel, name: str, *, exclude_id: Optional[int] = None):
    q = db.query(model).filter(model.name == name.strip(), model.is_delete.is_(False))
    if exclude_id is not None:
        q = q.filter(model.id != exclude_id)
    return q.first()


def get_named_items(db: Session, model: NamedModel, params: PageParams, *, search: Optional[str] = None, order: str = "desc"):
    q = db.query(model).filter(model.is_delete.is_(False))
    if search:
        q = q.filter(model.name.ilike(f"%{search.strip()}%"))
    q = ordered(q, model.created_at, order, model.id)
    return paginate(q, params)


def create_named(db: Session, model: NamedModel, item: schemas.NamedItemCreate):
    db_item = model(name=item.name.strip())
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def rename_named(db: Session, db_item, name: str):
    db_item.name = name.strip()
    db.commit()
    db.refresh(db_item)
    return db_item


def soft_delete(db: Session, db_item):
    db_item.is_delete = True
    db.commit()
    return db_item


def _search_titles(q, title_column, search: Optional[str], order: str, created_column, id_column, extra_columns=()):
    if search and search.strip():
        term = search.strip()
        pattern = f"%{term}%"
        q = q.filter(or_(title_column.ilike(pattern), *[col.ilike(pattern) for col in extra_columns]))
        # Relevance rank first; the requested order only breaks ties
        q = q.order_by(relevance_rank(title_column, term).asc())
    return ordered(q, created_column, order, id_column)


# Subcategories

def get_subcategory(db: Session, subcategory_id: int):
    return (
        db.query(models.Subcategory)
        .filter(models.Subcategory.id == subcategory_id, models.Subcategory.is_delete.is_(False))
        .first()
    )


def get_subcategories(
    db: Session,
    params: PageParams,
    *,
    search: Optional[str] = None,
    practice_area_id: Optional[int] = None,
    order: str = "desc",
):
    q = db.query(models.Subcategory).filter(models.Subcategory.is_delete.is_(False))
    if practice_area_id is not None:
        q = q.filter(models.Subcategory.practice_area_id == practice_area_id)
    q = _search_titles(q, models.Subcategory.title, search, order, models.Subcategory.created_at, models.Subcategory.id)
    return paginate(q, params)


def create_subcategory(db: Session, subcategory: schemas.SubcategoryCreate):
    db_subcategory = models.Subcategory(**subcategory.model_dump())
    db.add(db_subcategory)
    db.commit()
    db.refresh(db_subcategory)
    return db_subcategory


def update_subcategory(db: Session, db_subcategory: models.Subcategory, subcategory: schemas.SubcategoryUpdate):
    for key, value in subcategory.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(db_subcategory, key, value)
    db.commit()
    db.refresh(db_subcategory)
    return db_subcategory


# Custom field groups

def get_field_group(db: Session, group_id: int):
    return (
        db.query(models.CustomFieldGroup)
        .options(selectinload(models.CustomFieldGroup.fields))
        .filter(models.CustomFieldGroup.id == group_id, models.CustomFieldGroup.is_delete.is_(False))
        .first()
    )


def get_field_groups(
    db: Session,
    params: PageParams,
    *,
    search: Optional[str] = None,
    subcategory_id: Optional[int] = None,
    order: str = "desc",
):
    q = db.query(models.CustomFieldGroup).filter(models.CustomFieldGroup.is_delete.is_(False))
    if subcategory_id is not None:
        q = q.filter(models.CustomFieldGroup.subcategory_id == subcategory_id)
    q = _search_titles(
        q,
        models.CustomFieldGroup.title,
        search,
        order,
        models.CustomFieldGroup.created_at,
        models.CustomFieldGroup.id,
        extra_columns=(models.CustomFieldGroup.linked_to,),
    )
    return paginate(q, params)


def create_field_group(db: Session, group: schemas.CustomFieldGroupCreate):
    db_group = models.CustomFieldGroup(**group.model_dump())
    db.add(db_group)
    db.commit()
    db.refresh(db_group)
    return db_group


def update_field_group(db: Session, db_group: models.CustomFieldGroup, group: schemas.CustomFieldGroupUpdate):
    for key, value in group.model_dump(exclude_unset=True).items():
        if value is None and key == "title":
            continue
        setattr(db_group, key, value)
    db.commit()
    db.refresh(db_group)
    return db_group


# Custom fields

def get_custom_field(db: Session, field_id: int):
    return (
        db.query(models.CustomField)
        .filter(models.CustomField.id == field_id, models.CustomField.is_delete.is_(False))
        .first()
    )


def get_custom_fields(
    db: Session,
    params: PageParams,
    *,
    search: Optional[str] = None,
    field_group_id: Optional[int] = None,
    practice_area_id: Optional[int] = None,
    order: str = "desc",
):
    q = db.query(models.CustomField).filter(models.CustomField.is_delete.is_(False))
    if field_group_id is not None:
        q = q.filter(models.CustomField.field_group_id == field_group_id)
    if practice_area_id is not None:
        q = q.filter(models.CustomField.practice_area_id == practice_area_id)
    q = _search_titles(
        q,
        models.CustomField.title,
        search,
        order,
        models.CustomField.created_at,
        models.CustomField.id,
        extra_columns=(models.CustomField.template_keyword,),
    )
    return paginate(q, params)


def create_custom_field(db: Session, field: schemas.CustomFieldCreate):
    data = field.model_dump()
    data["type"] = field.type.value
    db_field = models.CustomField(**data)
    db.add(db_field)
    db.commit()
    db.refresh(db_field)
    return db_field


def update_custom_field(db: Session, db_field: models.CustomField, field: schemas.CustomFieldUpdate):
    update_data = field.model_dump(exclude_unset=True)
    if update_data.get("type") is not None:
        update_data["type"] = getattr(update_data["type"], "value", update_data["type"])
    for key, value in update_data.items():
        if value is None and key in ("title", "type"):
            continue
        setattr(db_field, key, value)
    db.commit()
    db.refresh(db_field)
    return db_field
