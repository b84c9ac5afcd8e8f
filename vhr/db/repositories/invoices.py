"""
Invoice and installment repository functions.

Invoices are soft-deleted; installments have no soft-delete flag and are
removed physically.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.models import now_utc
from vhr.db.pagination import PageParams, ordered, paginate
from vhr.db.repositories.credit_notes import credit_notes_applied
from vhr.services.invoice_totals import calculate_invoice_totals

UNSENT_STATUSES = ("draft", "reminder")
OUTSTANDING_STATUSES = ("unpaid", "partialyPaid", "overdue")
REQUIRED_FIELDS = frozenset({"invoice_number", "status", "payment_status"})


def get_invoice(db: Session, invoice_id: int):
    return (
        db.query(models.Invoice)
        .filter(models.Invoice.id == invoice_id, models.Invoice.is_delete.is_(False))
        .first()
    )


def get_invoices(
    db: Session,
    params: PageParams,
    *,
    status: Optional[str] = None,
    payment_status: Optional[str] = None,
    customer_id: Optional[int] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
):
    q = db.query(models.Invoice).filter(models.Invoice.is_delete.is_(False))
    if status:
        q = q.filter(models.Invoice.status == status)
    if payment_status:
        q = q.filter(models.Invoice.payment_status == payment_status)
    if customer_id is not None:
        q = q.filter(models.Invoice.customer_id == customer_id)
    if start and end:
        q = q.filter(models.Invoice.created_at >= start, models.Invoice.created_at <= end)
    q = ordered(q, models.Invoice.created_at, "desc", models.Invoice.id)
    return paginate(q, params)


def get_customer_invoices(db: Session, customer_id: int) -> List[models.Invoice]:
    return (
        db.query(models.Invoice)
        .filter(models.Invoice.customer_id == customer_id, models.Invoice.is_delete.is_(False))
        .order_by(models.Invoice.created_at.desc(), models.Invoice.id.desc())
        .all()
    )


def _apply_totals(db_invoice: models.Invoice, items: List[Dict[str, Any]]) -> None:
    totals = calculate_invoice_totals(items)
    db_invoice.items = totals["items"]
    db_invoice.sub_total = totals["sub_total"]
    db_invoice.vat_total = totals["vat_total"]
    db_invoice.discount_total = totals["discount_total"]
    db_invoice.amount = totals["amount"]
    db_invoice.outstanding_balance = totals["amount"]


def create_invoice(db: Session, invoice: schemas.InvoiceCreate, user_id: Optional[int] = None):
    data = invoice.model_dump(exclude={"items", "amount"})
    data["user_id"] = user_id
    data["status"] = invoice.status.value
    data["payment_status"] = invoice.payment_status.value
    db_invoice = models.Invoice(**data)
    items = [item.model_dump() for item in invoice.items]
    if items:
        _apply_totals(db_invoice, items)
    else:
        db_invoice.items = []
        db_invoice.amount = invoice.amount or 0
        db_invoice.sub_total = invoice.amount or 0
        db_invoice.outstanding_balance = invoice.amount or 0
    db.add(db_invoice)
    db.commit()
    db.refresh(db_invoice)
    return db_invoice


def update_invoice(db: Session, db_invoice: models.Invoice, invoice: schemas.InvoiceUpdate):
    update_data = invoice.model_dump(exclude_unset=True, exclude={"items"})
    for key in ("status", "payment_status"):
        if update_data.get(key) is not None:
            update_data[key] = getattr(update_data[key], "value", update_data[key])
    amount = update_data.pop("amount", None)
    for key, value in update_data.items():
        if value is None and key in REQUIRED_FIELDS:
            continue
        setattr(db_invoice, key, value)
    if invoice.items is not None:
        _apply_totals(db_invoice, [item.model_dump() for item in invoice.items])
    elif amount is not None and not db_invoice.items:
        db_invoice.amount = amount
        db_invoice.sub_total = amount
        db_invoice.outstanding_balance = amount
    db.commit()
    db.refresh(db_invoice)
    return db_invoice


def soft_delete_invoice(db: Session, db_invoice: models.Invoice):
    db_invoice.is_delete = True
    db.commit()
    return db_invoice


def cancel_invoice(db: Session, db_invoice: models.Invoice):
    db_invoice.status = "cancelled"
    db_invoice.payment_status = "cancelled"
    db_invoice.outstanding_balance = 0
    db.commit()
    db.refresh(db_invoice)
    return db_invoice


def mark_invoice_bad(db: Session, db_invoice: models.Invoice):
    db_invoice.status = "bad"
    db_invoice.marked_bad_on = now_utc()
    db.commit()
    db.refresh(db_invoice)
    return db_invoice


def remove_invoice_item(db: Session, db_invoice: models.Invoice, index: int) -> Optional[Dict[str, Any]]:
    """
    Drop line item `index` and recompute the invoice totals.

    Returns the removed item, or None when the index is out of range.
    """
    items = list(db_invoice.items or [])
    if index < 0 or index >= len(items):
        return None
    removed = items.pop(index)
    _apply_totals(db_invoice, items)
    db.commit()
    db.refresh(db_invoice)
    return removed


def invoice_stats(db: Session, start: datetime, end: datetime) -> Dict[str, Any]:
    base = db.query(models.Invoice).filter(
        models.Invoice.is_delete.is_(False),
        models.Invoice.created_at >= start,
        models.Invoice.created_at <= end,
    )
    counts = dict(
        base.with_entities(models.Invoice.status, func.count(models.Invoice.id))
        .group_by(models.Invoice.status)
        .all()
    )
    total_amount = base.with_entities(func.coalesce(func.sum(models.Invoice.amount), 0)).scalar()
    total_outstanding = (
        base.filter(models.Invoice.status.in_(OUTSTANDING_STATUSES))
        .with_entities(func.coalesce(func.sum(models.Invoice.outstanding_balance), 0))
        .scalar()
    )
    return {
        "start_date": start,
        "end_date": end,
        "total_invoices": sum(counts.values()),
        "draft": counts.get("draft", 0),
        "sent": counts.get("sent", 0),
        "partialy_paid": counts.get("partialyPaid", 0),
        "overdue": counts.get("overdue", 0),
        "paid": counts.get("paid", 0),
        "unsent": sum(counts.get(s, 0) for s in UNSENT_STATUSES),
        "total_amount": round(float(total_amount or 0), 2),
        "total_outstanding": round(float(total_outstanding or 0), 2),
    }


def vat_stats(db: Session, user_id: int, start: datetime, end: datetime) -> Dict[str, Any]:
    """
    VAT figures for the invoices and credit notes a user raised in the window.

    No expense ledger exists, so VAT paid is always zero and the net owed
    equals the VAT collected.
    """
    collected = (
        db.query(func.coalesce(func.sum(models.Invoice.vat_total), 0))
        .filter(
            models.Invoice.is_delete.is_(False),
            models.Invoice.user_id == user_id,
            models.Invoice.created_at >= start,
            models.Invoice.created_at <= end,
        )
        .scalar()
    )
    filed = (
        db.query(models.Invoice)
        .filter(
            models.Invoice.is_delete.is_(False),
            models.Invoice.user_id == user_id,
            models.Invoice.created_at >= start,
            models.Invoice.created_at <= end,
        )
        .count()
    )
    total_collected = round(float(collected or 0), 2)
    total_paid = 0.0
    return {
        "start_date": start,
        "end_date": end,
        "total_vat_collected": total_collected,
        "total_vat_paid": total_paid,
        "net_vat_owed": round(total_collected - total_paid, 2),
        "invoices_filed": filed,
        "credit_notes_applied": credit_notes_applied(db, user_id, start, end),
    }


# Installments

def get_installment(db: Session, installment_id: int):
    return db.query(models.Installment).filter(models.Installment.id == installment_id).first()


def get_installments(
    db: Session,
    params: PageParams,
    *,
    invoice_id: Optional[int] = None,
    status: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    order: str = "desc",
):
    q = db.query(models.Installment)
    if invoice_id is not None:
        q = q.filter(models.Installment.invoice_id == invoice_id)
    if status:
        q = q.filter(models.Installment.status == status)
    if start:
        q = q.filter(models.Installment.due_date >= start)
    if end:
        q = q.filter(models.Installment.due_date <= end)
    q = ordered(q, models.Installment.created_at, order, models.Installment.id)
    return paginate(q, params)


def create_installment(db: Session, installment: schemas.InstallmentCreate):
    db_installment = models.Installment(**installment.model_dump())
    db.add(db_installment)
    db.commit()
    db.refresh(db_installment)
    return db_installment


def update_installment(db: Session, db_installment: models.Installment, installment: schemas.InstallmentUpdate):
    update_data = installment.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if value is None and key != "paid_date":
            continue
        setattr(db_installment, key, value)
    db.commit()
    db.refresh(db_installment)
    return db_installment


def delete_installment(db: Session, db_installment: models.Installment):
    db.delete(db_installment)
    db.commit()
    return True
