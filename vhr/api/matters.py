"""Matter endpoints (super_admin only)."""
import logging
from datetime import datetime
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, date_range, page_params
from vhr.db import schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, normalize_order, page_payload
from vhr.db.repositories import matters as matters_repo
from vhr.utils.role_permissions import SUPER_ADMIN_ONLY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matters", tags=["matters"])

super_admin = authorize(SUPER_ADMIN_ONLY)


@router.post("", response_model=schemas.Envelope[schemas.Matter], status_code=status.HTTP_201_CREATED)
def create_matter_endpoint(matter: schemas.MatterCreate, db: Session = Depends(get_db), _user=Depends(super_admin)):
    created = matters_repo.create_matter(db, matter)
    logger.info(f"Created matter {created.id} for customer {created.customer_id}")
    return {"success": True, "data": created, "message": "Matter created successfully"}


@router.get("", response_model=schemas.Page[schemas.Matter])
def list_matters_endpoint(
    params: PageParams = Depends(page_params),
    customer_id: Optional[int] = Query(default=None, alias="customerId"),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    name: Optional[str] = None,
    order: Optional[str] = None,
    dates: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    start, end = dates
    matters, total = matters_repo.get_matters(
        db,
        params,
        customer_id=customer_id,
        status=status_filter,
        name=name,
        start=start,
        end=end,
        order=normalize_order(order, "desc"),
    )
    return page_payload(matters, total, params)


@router.get("/{matter_id}", response_model=schemas.Envelope[schemas.Matter])
def get_matter_endpoint(matter_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    matter = matters_repo.get_matter(db, matter_id)
    if matter is None:
        raise HTTPException(status_code=404, detail="Matter not found")
    return {"success": True, "data": matter}


@router.put("/{matter_id}", response_model=schemas.Envelope[schemas.Matter])
def update_matter_endpoint(
    matter_id: int,
    matter: schemas.MatterUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_matter = matters_repo.get_matter(db, matter_id)
    if db_matter is None:
        raise HTTPException(status_code=404, detail="Matter not found")
    updated = matters_repo.update_matter(db, db_matter, matter)
    logger.info(f"Updated matter {updated.id}")
    return {"success": True, "data": updated, "message": "Matter updated successfully"}


@router.delete("/{matter_id}", response_model=schemas.MessageResponse)
def delete_matter_endpoint(matter_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    db_matter = matters_repo.get_matter(db, matter_id)
    if db_matter is None:
        raise HTTPException(status_code=404, detail="Matter not found")
    matters_repo.soft_delete_matter(db, db_matter)
    logger.info(f"Deleted matter {matter_id}")
    return {"success": True, "message": "Matter deleted successfully"}
