"""
Time-bill endpoints (super_admin only).

`/calendar` and `/bulk-delete` are declared before the `/{time_bill_id}`
routes so they are not captured as ids.
"""
import logging
from datetime import datetime
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, date_range, page_params
from vhr.db import schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, total_pages
from vhr.db.repositories import time_bills as time_bills_repo
from vhr.services.time_bill_calendar import calendar_summary
from vhr.utils.role_permissions import SUPER_ADMIN_ONLY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/time-bills", tags=["time-bills"])

super_admin = authorize(SUPER_ADMIN_ONLY)


@router.post("", response_model=schemas.Envelope[schemas.TimeBill], status_code=status.HTTP_201_CREATED)
def create_time_bill_endpoint(
    time_bill: schemas.TimeBillCreate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    created = time_bills_repo.create_time_bill(db, time_bill)
    logger.info(f"Created time bill {created.id}")
    return {"success": True, "data": created, "message": "Time bill created successfully"}


@router.post("/bulk-delete", response_model=schemas.BulkDeleteResult)
def bulk_delete_time_bills_endpoint(
    payload: schemas.BulkDeleteRequest,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    if not payload.ids:
        raise HTTPException(status_code=400, detail="No IDs provided")
    deleted_count, not_found = time_bills_repo.bulk_soft_delete_time_bills(db, payload.ids)
    logger.info(f"Bulk deleted {deleted_count} time bills; not found: {not_found}")
    return {
        "success": True,
        "deleted_count": deleted_count,
        "not_found_ids": not_found,
        "message": f"Successfully deleted {deleted_count} time bills",
    }


@router.get("/calendar", response_model=schemas.Envelope[schemas.CalendarSummary])
def time_bill_calendar_endpoint(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    dates: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    start, end = dates
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="startDate must not be after endDate")
    summary = calendar_summary(db, start=start, end=end, status=status_filter)
    return {"success": True, "data": summary}


@router.get("", response_model=schemas.TimeBillPage)
def list_time_bills_endpoint(
    params: PageParams = Depends(page_params),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    name: Optional[str] = None,
    dates: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    start, end = dates
    time_bills, total = time_bills_repo.get_time_bills(
        db, params, status=status_filter, name=name, start=start, end=end
    )
    return {
        "data": time_bills,
        "pagination": {
            "total": total,
            "page": params.page,
            "limit": params.limit,
            "total_pages": total_pages(total, params.limit),
        },
    }


@router.get("/{time_bill_id}", response_model=schemas.Envelope[schemas.TimeBill])
def get_time_bill_endpoint(time_bill_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    time_bill = time_bills_repo.get_time_bill(db, time_bill_id)
    if time_bill is None:
        raise HTTPException(status_code=404, detail="Time bill not found")
    return {"success": True, "data": time_bill}


@router.put("/{time_bill_id}", response_model=schemas.Envelope[schemas.TimeBill])
def update_time_bill_endpoint(
    time_bill_id: int,
    time_bill: schemas.TimeBillUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_time_bill = time_bills_repo.get_time_bill(db, time_bill_id)
    if db_time_bill is None:
        raise HTTPException(status_code=404, detail="Time bill not found")
    updated = time_bills_repo.update_time_bill(db, db_time_bill, time_bill)
    logger.info(f"Updated time bill {updated.id}")
    return {"success": True, "data": updated, "message": "Time bill updated successfully"}


@router.delete("/{time_bill_id}", response_model=schemas.MessageResponse)
def delete_time_bill_endpoint(time_bill_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    db_time_bill = time_bills_repo.get_time_bill(db, time_bill_id)
    if db_time_bill is None:
        raise HTTPException(status_code=404, detail="Time bill not found")
    time_bills_repo.soft_delete_time_bill(db, db_time_bill)
    logger.info(f"Deleted time bill {time_bill_id}")
    return {"success": True, "message": "Time bill deleted successfully"}
