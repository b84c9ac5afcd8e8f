"""
Heads-up schedule endpoints (super_admin only).

Records describe when a digest email should run; nothing in this service
executes them.
"""
import logging
from datetime import datetime
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, date_range, page_params
from vhr.db import models, schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, normalize_order, page_payload
from vhr.db.repositories import heads_up as heads_up_repo
from vhr.utils.role_permissions import SUPER_ADMIN_ONLY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/heads-up", tags=["heads-up"])

super_admin = authorize(SUPER_ADMIN_ONLY)


def _get_or_404(db: Session, heads_up_id: int) -> models.HeadsUp:
    heads_up = heads_up_repo.get_heads_up(db, heads_up_id)
    if heads_up is None:
        raise HTTPException(status_code=404, detail="Heads-up notification not found")
    return heads_up


@router.get("", response_model=schemas.Page[schemas.HeadsUp])
def list_heads_up_endpoint(
    params: PageParams = Depends(page_params),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    module: Optional[str] = None,
    order: Optional[str] = None,
    dates: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    start, end = dates
    items, total = heads_up_repo.get_heads_ups(
        db,
        params,
        status=status_filter,
        module=module,
        start=start,
        end=end,
        order=normalize_order(order, "desc"),
    )
    return page_payload(items, total, params)


@router.get("/{heads_up_id}", response_model=schemas.Envelope[schemas.HeadsUp])
def get_heads_up_endpoint(heads_up_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    return {"success": True, "data": _get_or_404(db, heads_up_id)}


@router.post("", response_model=schemas.Envelope[schemas.HeadsUp], status_code=status.HTTP_201_CREATED)
def create_heads_up_endpoint(
    heads_up: schemas.HeadsUpCreate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    created = heads_up_repo.create_heads_up(db, heads_up)
    logger.info(f"Created heads-up notification {created.id} for module {created.module}")
    return {"success": True, "data": created, "message": "Heads-up notification created successfully"}


@router.put("/{heads_up_id}", response_model=schemas.Envelope[schemas.HeadsUp])
def update_heads_up_endpoint(
    heads_up_id: int,
    heads_up: schemas.HeadsUpUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    updated = heads_up_repo.update_heads_up(db, _get_or_404(db, heads_up_id), heads_up)
    logger.info(f"Updated heads-up notification {updated.id}")
    return {"success": True, "data": updated, "message": "Heads-up notification updated successfully"}


@router.delete("/{heads_up_id}", response_model=schemas.MessageResponse)
def delete_heads_up_endpoint(heads_up_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    heads_up_repo.soft_delete_heads_up(db, _get_or_404(db, heads_up_id))
    logger.info(f"Deleted heads-up notification {heads_up_id}")
    return {"success": True, "message": "Heads-up notification deleted successfully"}


@router.patch("/{heads_up_id}/toggle-status", response_model=schemas.Envelope[schemas.HeadsUp])
def toggle_heads_up_endpoint(heads_up_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    db_heads_up = _get_or_404(db, heads_up_id)
    activate = db_heads_up.status != heads_up_repo.STATUS_ACTIVE
    updated = heads_up_repo.set_heads_up_active(db, db_heads_up, activate)
    state = "enabled" if activate else "disabled"
    logger.info(f"Heads-up notification {heads_up_id} {state}")
    return {"success": True, "data": updated, "message": f"Heads-up notification {state} successfully"}


@router.patch("/{heads_up_id}/enable", response_model=schemas.Envelope[schemas.HeadsUp])
def enable_heads_up_endpoint(heads_up_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    updated = heads_up_repo.set_heads_up_active(db, _get_or_404(db, heads_up_id), True)
    return {"success": True, "data": updated, "message": "Heads-up notification enabled successfully"}


@router.patch("/{heads_up_id}/disable", response_model=schemas.Envelope[schemas.HeadsUp])
def disable_heads_up_endpoint(heads_up_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    updated = heads_up_repo.set_heads_up_active(db, _get_or_404(db, heads_up_id), False)
    return {"success": True, "data": updated, "message": "Heads-up notification disabled successfully"}
