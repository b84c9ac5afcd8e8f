"""Installment endpoints (super_admin only). Deletes remove the row."""
import logging
from datetime import datetime
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, date_range, page_params
from vhr.db import schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, normalize_order, page_payload
from vhr.db.repositories import invoices as invoices_repo
from vhr.utils.role_permissions import SUPER_ADMIN_ONLY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/installments", tags=["installments"])

super_admin = authorize(SUPER_ADMIN_ONLY)


@router.post("", response_model=schemas.Envelope[schemas.Installment], status_code=status.HTTP_201_CREATED)
def create_installment_endpoint(
    installment: schemas.InstallmentCreate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    created = invoices_repo.create_installment(db, installment)
    logger.info(f"Created installment {created.id} for invoice {created.invoice_id}")
    return {"success": True, "data": created, "message": "Installment created successfully"}


@router.get("", response_model=schemas.Page[schemas.Installment])
def list_installments_endpoint(
    params: PageParams = Depends(page_params),
    invoice_id: Optional[int] = Query(default=None, alias="invoiceId"),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    order: Optional[str] = None,
    dates: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    start, end = dates
    installments, total = invoices_repo.get_installments(
        db,
        params,
        invoice_id=invoice_id,
        status=status_filter,
        start=start,
        end=end,
        order=normalize_order(order, "desc"),
    )
    return page_payload(installments, total, params)


@router.get("/{installment_id}", response_model=schemas.Envelope[schemas.Installment])
def get_installment_endpoint(installment_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    installment = invoices_repo.get_installment(db, installment_id)
    if installment is None:
        raise HTTPException(status_code=404, detail="Installment not found")
    return {"success": True, "data": installment}


@router.put("/{installment_id}", response_model=schemas.Envelope[schemas.Installment])
def update_installment_endpoint(
    installment_id: int,
    installment: schemas.InstallmentUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_installment = invoices_repo.get_installment(db, installment_id)
    if db_installment is None:
        raise HTTPException(status_code=404, detail="Installment not found")
    updated = invoices_repo.update_installment(db, db_installment, installment)
    logger.info(f"Updated installment {updated.id}")
    return {"success": True, "data": updated, "message": "Installment updated successfully"}


@router.delete("/{installment_id}", response_model=schemas.MessageResponse)
def delete_installment_endpoint(installment_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    db_installment = invoices_repo.get_installment(db, installment_id)
    if db_installment is None:
        raise HTTPException(status_code=404, detail="Installment not found")
    invoices_repo.delete_installment(db, db_installment)
    logger.info(f"Deleted installment {installment_id}")
    return {"success": True, "message": "Installment deleted successfully"}
