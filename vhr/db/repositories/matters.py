from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate

# Columns that cannot be cleared; an explicit null on update leaves them unchanged
REQUIRED_FIELDS = frozenset({"customer_id", "description", "status"})


def get_matter(db: Session, matter_id: int):
    return (
        db.query(models.Matter)
        .filter(models.Matter.id == matter_id, models.Matter.is_delete.is_(False))
        .first()
    )


def get_matters(
    db: Session,
    params: PageParams,
    *,
    customer_id: Optional[int] = None,
    status: Optional[str] = None,
    name: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    order: str = "desc",
):
    q = db.query(models.Matter).filter(models.Matter.is_delete.is_(False))
    if customer_id is not None:
        q = q.filter(models.Matter.customer_id == customer_id)
    if status:
        q = q.filter(models.Matter.status == status)
    if name:
        pattern = f"%{name.strip()}%"
        q = q.filter(or_(models.Matter.description.ilike(pattern), models.Matter.case_worker.ilike(pattern)))
    if start:
        q = q.filter(models.Matter.created_at >= start)
    if end:
        q = q.filter(models.Matter.created_at <= end)
    q = ordered(q, models.Matter.created_at, order, models.Matter.id)
    return paginate(q, params)


def create_matter(db: Session, matter: schemas.MatterCreate):
    db_matter = models.Matter(**matter.model_dump())
    db.add(db_matter)
    db.commit()
    db.refresh(db_matter)
    return db_matter


def update_matter(db: Session, db_matter: models.Matter, matter: schemas.MatterUpdate):
    update_data = matter.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if value is None and key in REQUIRED_FIELDS:
            continue
        setattr(db_matter, key, value)
    db.commit()
    db.refresh(db_matter)
    return db_matter


def soft_delete_matter(db: Session, db_matter: models.Matter):
    db_matter.is_delete = True
    db.commit()
    return db_matter
