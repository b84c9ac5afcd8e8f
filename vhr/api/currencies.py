"""
Currency endpoints (super_admin only).

Bulk creation validates and conflict-checks every item on its own: valid
items are created, failures are reported by index alongside them.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, page_params
from vhr.db import schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, normalize_order, page_payload
from vhr.db.repositories import currencies as currencies_repo
from vhr.utils.role_permissions import SUPER_ADMIN_ONLY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/currencies", tags=["currencies"])

super_admin = authorize(SUPER_ADMIN_ONLY)

CONFLICT_MESSAGE = "Currency with this code already exists"


@router.post("", response_model=schemas.Envelope[schemas.Currency], status_code=status.HTTP_201_CREATED)
def create_currency_endpoint(
    currency: schemas.CurrencyCreate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    if currencies_repo.get_currency_by_code(db, currency.currency_code):
        raise HTTPException(status_code=409, detail=CONFLICT_MESSAGE)
    created = currencies_repo.create_currency(db, currency)
    logger.info(f"Created currency {created.id} ({created.currency_code})")
    return {"success": True, "data": created, "message": "Currency created successfully"}


@router.post("/bulk", response_model=schemas.CurrencyBulkResult, status_code=status.HTTP_201_CREATED)
def bulk_create_currencies_endpoint(
    payload: schemas.CurrencyBulkCreate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    if not payload.currencies:
        raise HTTPException(status_code=400, detail="Currencies array is required and must not be empty")

    created = []
    errors = []
    for index, raw in enumerate(payload.currencies):
        try:
            currency = schemas.CurrencyCreate.model_validate(raw)
        except ValidationError as e:
            errors.append({"index": index, "error": e.errors()[0]["msg"]})
            continue
        if currencies_repo.get_currency_by_code(db, currency.currency_code):
            errors.append({"index": index, "error": CONFLICT_MESSAGE})
            continue
        try:
            created.append(currencies_repo.create_currency(db, currency))
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to create currency at index {index}")
            errors.append({"index": index, "error": "Failed to create currency"})

    logger.info(f"Bulk created {len(created)} currencies with {len(errors)} errors")
    return {
        "success": True,
        "data": created,
        "errors": errors or None,
        "message": f"Successfully created {len(created)} currencies",
    }


@router.get("", response_model=schemas.Page[schemas.Currency])
def list_currencies_endpoint(
    params: PageParams = Depends(page_params),
    search: Optional[str] = None,
    is_crypto: Optional[bool] = Query(default=None, alias="isCrypto"),
    sort_by: str = Query(default="currencyName", alias="sortBy"),
    order: Optional[str] = None,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    currencies, total = currencies_repo.get_currencies(
        db,
        params,
        search=search,
        is_crypto=is_crypto,
        sort_by=sort_by,
        order=normalize_order(order, "asc"),
    )
    return page_payload(currencies, total, params)


@router.get("/all", response_model=schemas.CurrencyList)
def all_currencies_endpoint(db: Session = Depends(get_db), _user=Depends(super_admin)):
    currencies = currencies_repo.get_all_currencies(db)
    return {"success": True, "data": currencies, "total": len(currencies)}


@router.get("/{currency_id}", response_model=schemas.Envelope[schemas.Currency])
def get_currency_endpoint(currency_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    currency = currencies_repo.get_currency(db, currency_id)
    if currency is None:
        raise HTTPException(status_code=404, detail="Currency not found")
    return {"success": True, "data": currency}


@router.put("/{currency_id}", response_model=schemas.Envelope[schemas.Currency])
def update_currency_endpoint(
    currency_id: int,
    currency: schemas.CurrencyUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_currency = currencies_repo.get_currency(db, currency_id)
    if db_currency is None:
        raise HTTPException(status_code=404, detail="Currency not found")
    if currency.currency_code and currencies_repo.get_currency_by_code(
        db, currency.currency_code, exclude_id=db_currency.id
    ):
        raise HTTPException(status_code=409, detail=CONFLICT_MESSAGE)
    updated = currencies_repo.update_currency(db, db_currency, currency)
    logger.info(f"Updated currency {updated.id}")
    return {"success": True, "data": updated, "message": "Currency updated successfully"}


@router.delete("/{currency_id}", response_model=schemas.MessageResponse)
def delete_currency_endpoint(currency_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    db_currency = currencies_repo.get_currency(db, currency_id)
    if db_currency is None:
        raise HTTPException(status_code=404, detail="Currency not found")
    currencies_repo.soft_delete_currency(db, db_currency)
    logger.info(f"Deleted currency {currency_id}")
    return {"success": True, "message": "Currency deleted successfully"}
