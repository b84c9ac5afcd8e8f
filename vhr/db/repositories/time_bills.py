"""
Time-bill repository functions.

Single and bulk deletes both flip the soft-delete flag.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate


def get_time_bill(db: Session, time_bill_id: int):
    return (
        db.query(models.TimeBill)
        .filter(models.TimeBill.id == time_bill_id, models.TimeBill.is_delete.is_(False))
        .first()
    )


def get_time_bills(
    db: Session,
    params: PageParams,
    *,
    status: Optional[str] = None,
    name: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
):
    q = db.query(models.TimeBill).filter(models.TimeBill.is_delete.is_(False))
    if status:
        q = q.filter(models.TimeBill.status.ilike(f"%{status.strip()}%"))
    if name:
        pattern = f"%{name.strip()}%"
        q = q.filter(or_(models.TimeBill.case_worker.ilike(pattern), models.TimeBill.matter.ilike(pattern)))
    if start:
        q = q.filter(models.TimeBill.created_at >= start)
    if end:
        q = q.filter(models.TimeBill.created_at <= end)
    q = ordered(q, models.TimeBill.created_at, "desc", models.TimeBill.id)
    return paginate(q, params)


def create_time_bill(db: Session, time_bill: schemas.TimeBillCreate):
    db_time_bill = models.TimeBill(**time_bill.model_dump())
    db.add(db_time_bill)
    db.commit()
    db.refresh(db_time_bill)
    return db_time_bill


def update_time_bill(db: Session, db_time_bill: models.TimeBill, time_bill: schemas.TimeBillUpdate):
    update_data = time_bill.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if value is None and key in ("duration", "hourly_rate"):
            continue
        setattr(db_time_bill, key, value)
    db.commit()
    db.refresh(db_time_bill)
    return db_time_bill


def soft_delete_time_bill(db: Session, db_time_bill: models.TimeBill):
    db_time_bill.is_delete = True
    db.commit()
    return db_time_bill


def bulk_soft_delete_time_bills(db: Session, ids: Sequence[int]) -> Tuple[int, List[int]]:
    """Soft-delete every non-deleted bill in `ids`; returns (deleted count, ids not found)."""
    wanted = list(dict.fromkeys(ids))
    rows = (
        db.query(models.TimeBill)
        .filter(models.TimeBill.id.in_(wanted), models.TimeBill.is_delete.is_(False))
        .all()
    )
    found = {row.id for row in rows}
    for row in rows:
        row.is_delete = True
    db.commit()
    return len(rows), [i for i in wanted if i not in found]
