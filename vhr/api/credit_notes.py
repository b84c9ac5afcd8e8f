"""
Credit note endpoints (both roles).

Every write checks that the referenced customer, currency and invoice exist
and that the credit note number is not already taken.
"""
import logging
from datetime import datetime
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, date_range, page_params
from vhr.db import schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, page_payload
from vhr.db.repositories import credit_notes as credit_notes_repo
from vhr.db.repositories import currencies as currencies_repo
from vhr.db.repositories import customers as customers_repo
from vhr.db.repositories import invoices as invoices_repo
from vhr.utils.role_permissions import ALL_ROLES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/credit-notes", tags=["credit-notes"])

any_role = authorize(ALL_ROLES)


def _check_references(
    db: Session,
    customer_id: Optional[int],
    currency_id: Optional[int],
    invoice_id: Optional[int],
) -> None:
    if customer_id is not None and customers_repo.get_customer(db, customer_id) is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    if currency_id is not None and currencies_repo.get_currency(db, currency_id) is None:
        raise HTTPException(status_code=404, detail="Currency not found")
    if invoice_id is not None and invoices_repo.get_invoice(db, invoice_id) is None:
        raise HTTPException(status_code=404, detail="Invoice not found")


@router.post("", response_model=schemas.Envelope[schemas.CreditNote], status_code=status.HTTP_201_CREATED)
def create_credit_note_endpoint(
    credit_note: schemas.CreditNoteCreate,
    db: Session = Depends(get_db),
    user=Depends(any_role),
):
    if credit_notes_repo.get_credit_note_by_number(db, credit_note.credit_note_number):
        raise HTTPException(status_code=400, detail="Credit note number already exists")
    _check_references(db, credit_note.customer_id, credit_note.currency_id, credit_note.invoice_id)
    created = credit_notes_repo.create_credit_note(db, credit_note, user_id=user.id)
    logger.info(f"Created credit note {created.id} ({created.credit_note_number}) amount={created.amount}")
    return {"success": True, "data": created, "message": "Credit note created successfully"}


@router.get("", response_model=schemas.Page[schemas.CreditNote])
def list_credit_notes_endpoint(
    params: PageParams = Depends(page_params),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    customer_id: Optional[int] = Query(default=None, alias="customerId"),
    invoice_id: Optional[int] = Query(default=None, alias="invoiceId"),
    dates: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    start, end = dates
    credit_notes, total = credit_notes_repo.get_credit_notes(
        db,
        params,
        status=status_filter,
        customer_id=customer_id,
        invoice_id=invoice_id,
        start=start,
        end=end,
    )
    return page_payload(credit_notes, total, params)


@router.get("/stats", response_model=schemas.Envelope[schemas.CreditNoteStats])
def credit_note_stats_endpoint(db: Session = Depends(get_db), _user=Depends(any_role)):
    return {"success": True, "data": credit_notes_repo.credit_note_stats(db)}


@router.get("/customer/{customer_id}", response_model=schemas.Page[schemas.CreditNote])
def customer_credit_notes_endpoint(
    customer_id: int,
    params: PageParams = Depends(page_params),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    if customers_repo.get_customer(db, customer_id) is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    credit_notes, total = credit_notes_repo.get_credit_notes(
        db, params, status=status_filter, customer_id=customer_id
    )
    return page_payload(credit_notes, total, params)


@router.get("/{credit_note_id}", response_model=schemas.Envelope[schemas.CreditNote])
def get_credit_note_endpoint(credit_note_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    credit_note = credit_notes_repo.get_credit_note(db, credit_note_id)
    if credit_note is None:
        raise HTTPException(status_code=404, detail="Credit note not found")
    return {"success": True, "data": credit_note}


@router.put("/{credit_note_id}", response_model=schemas.Envelope[schemas.CreditNote])
def update_credit_note_endpoint(
    credit_note_id: int,
    credit_note: schemas.CreditNoteUpdate,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    db_credit_note = credit_notes_repo.get_credit_note(db, credit_note_id)
    if db_credit_note is None:
        raise HTTPException(status_code=404, detail="Credit note not found")
    number = credit_note.credit_note_number
    if number and credit_notes_repo.get_credit_note_by_number(db, number, exclude_id=credit_note_id):
        raise HTTPException(status_code=400, detail="Credit note number already exists")
    _check_references(db, credit_note.customer_id, credit_note.currency_id, credit_note.invoice_id)
    updated = credit_notes_repo.update_credit_note(db, db_credit_note, credit_note)
    logger.info(f"Updated credit note {credit_note_id}")
    return {"success": True, "data": updated, "message": "Credit note updated successfully"}


@router.delete("/{credit_note_id}", response_model=schemas.MessageResponse)
def delete_credit_note_endpoint(credit_note_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    db_credit_note = credit_notes_repo.get_credit_note(db, credit_note_id)
    if db_credit_note is None:
        raise HTTPException(status_code=404, detail="Credit note not found")
    credit_notes_repo.soft_delete_credit_note(db, db_credit_note)
    logger.info(f"Deleted credit note {credit_note_id}")
    return {"success": True, "message": "Credit note deleted successfully"}
