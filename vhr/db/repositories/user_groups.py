"""
User group repository functions.

Group titles are unique among non-deleted groups; the check is a pre-query
made by the router before create/update.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate
from vhr.utils.role_permissions import get_default_permissions


def get_user_group(db: Session, group_id: int):
    return (
        db.query(models.UserGroup)
        .filter(models.UserGroup.id == group_id, models.UserGroup.is_delete.is_(False))
        .first()
    )


def get_user_group_by_title(db: Session, title: str, *, exclude_id: Optional[int] = None):
    q = db.query(models.UserGroup).filter(
        models.UserGroup.title == title.strip(),
        models.UserGroup.is_delete.is_(False),
    )
    if exclude_id is not None:
        q = q.filter(models.UserGroup.id != exclude_id)
    return q.first()


def get_user_groups(db: Session, params: PageParams, *, search: Optional[str] = None, order: str = "desc"):
    q = db.query(models.UserGroup).filter(models.UserGroup.is_delete.is_(False))
    if search:
        q = q.filter(models.UserGroup.title.ilike(f"%{search.strip()}%"))
    q = ordered(q, models.UserGroup.created_at, order, models.UserGroup.id)
    return paginate(q, params)


def count_group_users(db: Session, group_id: int) -> int:
    return (
        db.query(func.count(models.User.id))
        .filter(models.User.user_group_id == group_id, models.User.is_delete.is_(False))
        .scalar()
        or 0
    )


def count_users_by_group(db: Session, group_ids: Iterable[int]) -> Dict[int, int]:
    ids = list(group_ids)
    if not ids:
        return {}
    rows = (
        db.query(models.User.user_group_id, func.count(models.User.id))
        .filter(models.User.user_group_id.in_(ids), models.User.is_delete.is_(False))
        .group_by(models.User.user_group_id)
        .all()
    )
    counts = {group_id: 0 for group_id in ids}
    counts.update({group_id: count for group_id, count in rows})
    return counts


def get_group_users(db: Session, group_id: int, params: PageParams):
    q = db.query(models.User).filter(
        models.User.user_group_id == group_id,
        models.User.is_delete.is_(False),
    )
    q = ordered(q, models.User.created_at, "desc", models.User.id)
    return paginate(q, params)


def create_user_group(db: Session, group: schemas.UserGroupCreate):
    db_group = models.UserGroup(
        title=group.title.strip(),
        description=group.description,
        permissions=group.permissions or get_default_permissions(),
        custom_permissions=[p.model_dump(mode="json") for p in group.custom_permissions],
        is_active=group.is_active,
    )
    db.add(db_group)
    db.commit()
    db.refresh(db_group)
    return db_group


def update_user_group(db: Session, db_group: models.UserGroup, group: schemas.UserGroupUpdate):
    update_data = group.model_dump(exclude_unset=True, mode="json", by_alias=False)
    if update_data.get("title"):
        update_data["title"] = update_data["title"].strip()
    # Required JSON columns are never cleared by an explicit null
    for key in ("permissions", "custom_permissions", "title", "is_active"):
        if key in update_data and update_data[key] is None:
            update_data.pop(key)
    for key, value in update_data.items():
        setattr(db_group, key, value)
    db.commit()
    db.refresh(db_group)
    return db_group


def set_custom_permissions(db: Session, db_group: models.UserGroup, custom_permissions: List[dict]):
    # Assign a new list object so the JSON column is flagged dirty
    db_group.custom_permissions = list(custom_permissions)
    db.commit()
    db.refresh(db_group)
    return db_group


def soft_delete_user_group(db: Session, db_group: models.UserGroup):
    db_group.is_delete = True
    db.commit()
    return db_group
