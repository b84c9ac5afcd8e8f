from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


def get_heads_up(db: Session, heads_up_id: int):
    return (
        db.query(models.HeadsUp)
        .filter(models.HeadsUp.id == heads_up_id, models.HeadsUp.is_delete.is_(False))
        .first()
    )


def get_heads_ups(
    db: Session,
    params: PageParams,
    *,
    status: Optional[str] = None,
    module: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    order: str = "desc",
):
    q = db.query(models.HeadsUp).filter(models.HeadsUp.is_delete.is_(False))
    if status:
        q = q.filter(models.HeadsUp.status == status)
    if module:
        q = q.filter(models.HeadsUp.module == module)
    if start and end:
        q = q.filter(models.HeadsUp.created_at >= start, models.HeadsUp.created_at <= end)
    q = ordered(q, models.HeadsUp.created_at, order, models.HeadsUp.id)
    return paginate(q, params)


def create_heads_up(db: Session, heads_up: schemas.HeadsUpCreate):
    data = heads_up.model_dump()
    data["status"] = heads_up.status.value
    db_heads_up = models.HeadsUp(**data)
    db.add(db_heads_up)
    db.commit()
    db.refresh(db_heads_up)
    return db_heads_up


def update_heads_up(db: Session, db_heads_up: models.HeadsUp, heads_up: schemas.HeadsUpUpdate):
    # Only keys present in the request body are merged
    update_data = heads_up.model_dump(exclude_unset=True)
    if update_data.get("status") is not None:
        update_data["status"] = getattr(update_data["status"], "value", update_data["status"])
    for key, value in update_data.items():
        if value is None and key in ("name", "module", "frequency", "status", "enabled", "rows_in_email"):
            continue
        setattr(db_heads_up, key, value)
    db.commit()
    db.refresh(db_heads_up)
    return db_heads_up


def set_heads_up_active(db: Session, db_heads_up: models.HeadsUp, active: bool):
    db_heads_up.status = STATUS_ACTIVE if active else STATUS_INACTIVE
    db_heads_up.enabled = active
    db.commit()
    db.refresh(db_heads_up)
    return db_heads_up


def soft_delete_heads_up(db: Session, db_heads_up: models.HeadsUp):
    db_heads_up.is_delete = True
    db.commit()
    return db_heads_up
