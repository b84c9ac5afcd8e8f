"""
Credit note repository functions.

Credit note numbers are unique among non-deleted rows; the check is an
explicit pre-query in the router.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate
from vhr.utils.dates import as_aware


def get_credit_note(db: Session, credit_note_id: int):
    return (
        db.query(models.CreditNote)
        .filter(models.CreditNote.id == credit_note_id, models.CreditNote.is_delete.is_(False))
        .first()
    )


def get_credit_note_by_number(db: Session, number: str, *, exclude_id: Optional[int] = None):
    q = db.query(models.CreditNote).filter(
        models.CreditNote.credit_note_number == number,
        models.CreditNote.is_delete.is_(False),
    )
    if exclude_id is not None:
        q = q.filter(models.CreditNote.id != exclude_id)
    return q.first()


def get_credit_notes(
    db: Session,
    params: PageParams,
    *,
    status: Optional[str] = None,
    customer_id: Optional[int] = None,
    invoice_id: Optional[int] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
):
    q = db.query(models.CreditNote).filter(models.CreditNote.is_delete.is_(False))
    if status:
        q = q.filter(models.CreditNote.status == status)
    if customer_id is not None:
        q = q.filter(models.CreditNote.customer_id == customer_id)
    if invoice_id is not None:
        q = q.filter(models.CreditNote.invoice_id == invoice_id)
    if start and end:
        q = q.filter(models.CreditNote.created_at >= start, models.CreditNote.created_at <= end)
    q = ordered(q, models.CreditNote.created_at, "desc", models.CreditNote.id)
    return paginate(q, params)


def create_credit_note(db: Session, credit_note: schemas.CreditNoteCreate, user_id: Optional[int] = None):
    data = credit_note.model_dump()
    data["status"] = credit_note.status.value
    db_credit_note = models.CreditNote(**data, user_id=user_id)
    db.add(db_credit_note)
    db.commit()
    db.refresh(db_credit_note)
    return db_credit_note


def update_credit_note(db: Session, db_credit_note: models.CreditNote, credit_note: schemas.CreditNoteUpdate):
    update_data = credit_note.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        # Every column is required; null leaves the stored value alone
        if value is None:
            continue
        setattr(db_credit_note, key, getattr(value, "value", value))
    db.commit()
    db.refresh(db_credit_note)
    return db_credit_note


def soft_delete_credit_note(db: Session, db_credit_note: models.CreditNote):
    db_credit_note.is_delete = True
    db.commit()
    return db_credit_note


def credit_note_stats(db: Session, *, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Totals over every live credit note plus per-month figures.

    Monthly buckets (``YYYY-MM``, ascending) start on 1 January of the
    previous calendar year.
    """
    base = db.query(models.CreditNote).filter(models.CreditNote.is_delete.is_(False))
    total = base.count()
    total_amount = base.with_entities(func.coalesce(func.sum(models.CreditNote.amount), 0)).scalar()
    status_counts = dict(
        base.with_entities(models.CreditNote.status, func.count(models.CreditNote.id))
        .group_by(models.CreditNote.status)
        .all()
    )

    current = now or datetime.now(timezone.utc)
    window_start = datetime(current.year - 1, 1, 1, tzinfo=timezone.utc)
    rows = (
        base.filter(models.CreditNote.created_at >= window_start)
        .with_entities(models.CreditNote.created_at, models.CreditNote.amount)
        .all()
    )
    months: Dict[str, Dict[str, float]] = defaultdict(lambda: {"count": 0, "total_amount": 0.0})
    for created_at, amount in rows:
        key = as_aware(created_at).strftime("%Y-%m")
        months[key]["count"] += 1
        months[key]["total_amount"] += float(amount or 0)

    monthly: List[Dict[str, Any]] = [
        {"month": key, "count": int(bucket["count"]), "total_amount": round(bucket["total_amount"], 2)}
        for key, bucket in sorted(months.items())
    ]
    return {
        "total_credit_notes": total,
        "total_amount": round(float(total_amount or 0), 2),
        "status_counts": {status: int(count) for status, count in status_counts.items()},
        "monthly_stats": monthly,
    }


def credit_notes_applied(db: Session, user_id: int, start: datetime, end: datetime) -> float:
    """Sum of credit note amounts a user raised within the window."""
    total = (
        db.query(func.coalesce(func.sum(models.CreditNote.amount), 0))
        .filter(
            models.CreditNote.is_delete.is_(False),
            models.CreditNote.user_id == user_id,
            models.CreditNote.created_at >= start,
            models.CreditNote.created_at <= end,
        )
        .scalar()
    )
    return round(float(total or 0), 2)
