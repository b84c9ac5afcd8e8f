"""
Invoice endpoints (both roles).

Totals are always recomputed from line items on create and update; the
stats endpoint reports counts and sums for a created-at window.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, date_range, page_params
from vhr.db import schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, page_payload
from vhr.db.repositories import invoices as invoices_repo
from vhr.utils.dates import current_month_range
from vhr.utils.role_permissions import ALL_ROLES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invoices", tags=["invoices"])

any_role = authorize(ALL_ROLES)


@router.post("", response_model=schemas.Envelope[schemas.Invoice], status_code=status.HTTP_201_CREATED)
def create_invoice_endpoint(invoice: schemas.InvoiceCreate, db: Session = Depends(get_db), user=Depends(any_role)):
    if not invoice.items and invoice.amount is None:
        raise HTTPException(status_code=400, detail="Either items or amount is required")
    created = invoices_repo.create_invoice(db, invoice, user_id=user.id)
    logger.info(f"Created invoice {created.id} ({created.invoice_number}) amount={created.amount}")
    return {"success": True, "data": created, "message": "Invoice created successfully"}


@router.get("", response_model=schemas.Page[schemas.Invoice])
def list_invoices_endpoint(
    params: PageParams = Depends(page_params),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    payment_status: Optional[str] = Query(default=None, alias="paymentStatus"),
    customer_id: Optional[int] = Query(default=None, alias="customerId"),
    dates: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    start, end = dates
    invoices, total = invoices_repo.get_invoices(
        db,
        params,
        status=status_filter,
        payment_status=payment_status,
        customer_id=customer_id,
        start=start,
        end=end,
    )
    return page_payload(invoices, total, params)


@router.get("/stats", response_model=schemas.Envelope[schemas.InvoiceStats])
def invoice_stats_endpoint(
    dates: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    start, end = dates
    month_start, month_end = current_month_range()
    stats = invoices_repo.invoice_stats(db, start or month_start, end or month_end)
    return {"success": True, "data": stats}


@router.get("/vat-stats", response_model=schemas.Envelope[schemas.VatStats])
def vat_stats_endpoint(
    dates: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    db: Session = Depends(get_db),
    user=Depends(any_role),
):
    """VAT collected on the caller's invoices; both dates or neither, defaulting to the current month."""
    start, end = dates
    if not (start and end):
        start, end = current_month_range()
    stats = invoices_repo.vat_stats(db, user.id, start, end)
    return {"success": True, "data": stats, "message": "VAT statistics calculated successfully"}


@router.get("/customer/{customer_id}", response_model=schemas.Envelope[List[schemas.Invoice]])
def customer_invoices_endpoint(customer_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    return {"success": True, "data": invoices_repo.get_customer_invoices(db, customer_id)}


@router.get("/{invoice_id}", response_model=schemas.Envelope[schemas.Invoice])
def get_invoice_endpoint(invoice_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    invoice = invoices_repo.get_invoice(db, invoice_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return {"success": True, "data": invoice}


@router.put("/{invoice_id}", response_model=schemas.Envelope[schemas.Invoice])
def update_invoice_endpoint(
    invoice_id: int,
    invoice: schemas.InvoiceUpdate,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    db_invoice = invoices_repo.get_invoice(db, invoice_id)
    if db_invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    updated = invoices_repo.update_invoice(db, db_invoice, invoice)
    logger.info(f"Updated invoice {updated.id}")
    return {"success": True, "data": updated, "message": "Invoice updated successfully"}


@router.delete("/{invoice_id}", response_model=schemas.MessageResponse)
def delete_invoice_endpoint(invoice_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    db_invoice = invoices_repo.get_invoice(db, invoice_id)
    if db_invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    invoices_repo.soft_delete_invoice(db, db_invoice)
    logger.info(f"Deleted invoice {invoice_id}")
    return {"success": True, "message": "Invoice deleted successfully"}


def _live_invoice(db: Session, invoice_id: int):
    invoice = invoices_repo.get_invoice(db, invoice_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.patch("/{invoice_id}/cancel", response_model=schemas.Envelope[schemas.Invoice])
def cancel_invoice_endpoint(
    invoice_id: int,
    payload: Optional[schemas.CancelInvoiceRequest] = None,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    db_invoice = _live_invoice(db, invoice_id)
    if db_invoice.payment_status == "paid":
        raise HTTPException(status_code=400, detail="Cannot cancel paid invoice. Please process a refund instead.")
    cancelled = invoices_repo.cancel_invoice(db, db_invoice)
    reason = payload.reason if payload else None
    logger.info(f"Cancelled invoice {invoice_id}" + (f": {reason}" if reason else ""))
    return {"success": True, "data": cancelled, "message": "Invoice cancelled successfully"}


@router.patch("/{invoice_id}/mark-bad", response_model=schemas.Envelope[schemas.Invoice])
def mark_invoice_bad_endpoint(invoice_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    db_invoice = _live_invoice(db, invoice_id)
    updated = invoices_repo.mark_invoice_bad(db, db_invoice)
    logger.info(f"Marked invoice {invoice_id} as bad debt")
    return {"success": True, "data": updated, "message": "Invoice marked as bad successfully"}


@router.delete("/{invoice_id}/items/{item_index}", response_model=schemas.Envelope[schemas.InvoiceItemRemoval])
def delete_invoice_item_endpoint(
    invoice_id: int,
    item_index: int,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    db_invoice = _live_invoice(db, invoice_id)
    if db_invoice.payment_status == "paid":
        raise HTTPException(status_code=400, detail="Invoice already Paid")
    removed = invoices_repo.remove_invoice_item(db, db_invoice, item_index)
    if removed is None:
        raise HTTPException(status_code=400, detail="Invalid Invoice item index")
    logger.info(f"Removed item {item_index} from invoice {invoice_id}")
    return {
        "success": True,
        "data": {"removed_item": removed, "updated_invoice": db_invoice},
        "message": "Invoice item removed successfully",
    }
