"""
Financial statement endpoints (super_admin only).

Amounts are stored in the base currency. The per-customer listing converts
them with the statement currency's exchange rate.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, page_params
from vhr.db import models, schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, page_payload
from vhr.db.repositories import currencies as currencies_repo
from vhr.db.repositories import customers as customers_repo
from vhr.db.repositories import financial_statements as statements_repo
from vhr.services.financial_totals import convert_statement
from vhr.utils.role_permissions import SUPER_ADMIN_ONLY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/financial-statements", tags=["financial-statements"])

super_admin = authorize(SUPER_ADMIN_ONLY)


def _resolve_references(db: Session, payload: schemas.FinancialStatementWrite) -> models.Customer:
    customer = customers_repo.get_customer_by_email(db, str(payload.customer_email))
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    if payload.currency_id is not None and currencies_repo.get_currency(db, payload.currency_id) is None:
        raise HTTPException(status_code=404, detail="Currency not found")
    return customer


def _live_statement(db: Session, statement_id: int) -> models.FinancialStatement:
    statement = statements_repo.get_statement(db, statement_id)
    if statement is None:
        raise HTTPException(status_code=404, detail="Financial statement not found")
    return statement


@router.post("", response_model=schemas.Envelope[schemas.FinancialStatement], status_code=status.HTTP_201_CREATED)
def create_statement_endpoint(
    payload: schemas.FinancialStatementWrite,
    db: Session = Depends(get_db),
    user=Depends(super_admin),
):
    customer = _resolve_references(db, payload)
    created = statements_repo.create_statement(db, payload, customer, user_id=user.id)
    logger.info(f"Created financial statement {created.id} for customer {customer.id}")
    return {"success": True, "data": created, "message": "Financial statement created successfully"}


@router.get("", response_model=schemas.Page[schemas.FinancialStatement])
def list_statements_endpoint(
    params: PageParams = Depends(page_params),
    customer_id: Optional[int] = Query(default=None, alias="customerId"),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    statements, total = statements_repo.get_statements(db, params, customer_id=customer_id, status=status_filter)
    return page_payload(statements, total, params)


@router.get("/customer/{customer_id}", response_model=schemas.Envelope[List[schemas.FinancialStatement]])
def customer_statements_endpoint(customer_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    if customers_repo.get_customer(db, customer_id) is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    converted = []
    for statement in statements_repo.get_customer_statements(db, customer_id):
        rate = 1.0
        if statement.currency_id is not None:
            currency = currencies_repo.get_currency(db, statement.currency_id)
            if currency is not None:
                rate = float(currency.exchange_rate or 1)
        serialized = schemas.FinancialStatement.model_validate(statement).model_dump()
        converted.append(convert_statement(serialized, rate))
    return {"success": True, "data": converted}


@router.get("/{statement_id}", response_model=schemas.Envelope[schemas.FinancialStatement])
def get_statement_endpoint(statement_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    return {"success": True, "data": _live_statement(db, statement_id)}


@router.put("/{statement_id}", response_model=schemas.Envelope[schemas.FinancialStatement])
def replace_statement_endpoint(
    statement_id: int,
    payload: schemas.FinancialStatementWrite,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_statement = _live_statement(db, statement_id)
    customer = _resolve_references(db, payload)
    updated = statements_repo.replace_statement(db, db_statement, payload, customer)
    logger.info(f"Updated financial statement {statement_id}")
    return {"success": True, "data": updated, "message": "Financial statement updated successfully"}


@router.delete("/{statement_id}", response_model=schemas.MessageResponse)
def delete_statement_endpoint(statement_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    db_statement = _live_statement(db, statement_id)
    statements_repo.soft_delete_statement(db, db_statement)
    logger.info(f"Deleted financial statement {statement_id}")
    return {"success": True, "message": "Financial statement deleted successfully"}


def _remove_line(db: Session, statement_id: int, section: str, index: int, label: str):
    db_statement = _live_statement(db, statement_id)
    removed = statements_repo.remove_line(db, db_statement, section, index)
    if removed is None:
        raise HTTPException(status_code=400, detail=f"Invalid {label.lower()} item index")
    logger.info(f"Removed {section} row {index} from financial statement {statement_id}")
    return {
        "success": True,
        "data": {"removed_item": removed, "updated_statement": db_statement},
        "message": f"{label} item deleted successfully",
    }


@router.delete(
    "/{statement_id}/disbursements/{item_index}",
    response_model=schemas.Envelope[schemas.StatementLineRemoval],
)
def delete_disbursement_endpoint(
    statement_id: int,
    item_index: int,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    return _remove_line(db, statement_id, "disbursements", item_index, "Disbursement")


@router.delete(
    "/{statement_id}/our-costs/{item_index}",
    response_model=schemas.Envelope[schemas.StatementLineRemoval],
)
def delete_our_cost_endpoint(
    statement_id: int,
    item_index: int,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    return _remove_line(db, statement_id, "our_cost", item_index, "Our cost")
