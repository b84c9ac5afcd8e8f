from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate
from vhr.services.financial_totals import calculate_statement_totals


def get_statement(db: Session, statement_id: int):
    return (
        db.query(models.FinancialStatement)
        .filter(models.FinancialStatement.id == statement_id, models.FinancialStatement.is_delete.is_(False))
        .first()
    )


def get_statements(
    db: Session,
    params: PageParams,
    *,
    customer_id: Optional[int] = None,
    status: Optional[str] = None,
):
    q = db.query(models.FinancialStatement).filter(models.FinancialStatement.is_delete.is_(False))
    if customer_id is not None:
        q = q.filter(models.FinancialStatement.customer_id == customer_id)
    if status:
        q = q.filter(models.FinancialStatement.status == status)
    q = ordered(q, models.FinancialStatement.created_at, "desc", models.FinancialStatement.id)
    return paginate(q, params)


def get_customer_statements(db: Session, customer_id: int) -> List[models.FinancialStatement]:
    return (
        db.query(models.FinancialStatement)
        .filter(
            models.FinancialStatement.customer_id == customer_id,
            models.FinancialStatement.is_delete.is_(False),
        )
        .order_by(models.FinancialStatement.created_at.desc(), models.FinancialStatement.id.desc())
        .all()
    )


def _apply_lines(
    db_statement: models.FinancialStatement,
    disbursements: List[Dict[str, Any]],
    our_cost: List[Dict[str, Any]],
    summary: List[Dict[str, Any]],
) -> None:
    totals = calculate_statement_totals(disbursements, our_cost, summary)
    db_statement.disbursements = totals["disbursements"]
    db_statement.our_cost = totals["our_cost"]
    db_statement.summary = totals["summary"]
    db_statement.total_disbursements = totals["total_disbursements"]
    db_statement.total_our_costs = totals["total_our_costs"]
    db_statement.total_amount_required = totals["total_amount_required"]


def _assign(
    db_statement: models.FinancialStatement,
    payload: schemas.FinancialStatementWrite,
    customer: models.Customer,
) -> None:
    db_statement.matter_id = payload.matter_id
    db_statement.customer_id = customer.id
    db_statement.currency_id = payload.currency_id
    db_statement.customer_name = payload.customer_name
    db_statement.customer_email = str(payload.customer_email)
    db_statement.case_description = payload.case_description or ""
    db_statement.completion_date = payload.completion_date
    db_statement.status = payload.status.value
    _apply_lines(
        db_statement,
        [line.model_dump() for line in payload.disbursements],
        [line.model_dump() for line in payload.our_cost],
        [line.model_dump() for line in payload.summary],
    )


def create_statement(
    db: Session,
    payload: schemas.FinancialStatementWrite,
    customer: models.Customer,
    user_id: Optional[int] = None,
):
    db_statement = models.FinancialStatement(user_id=user_id)
    _assign(db_statement, payload, customer)
    db.add(db_statement)
    db.commit()
    db.refresh(db_statement)
    return db_statement


def replace_statement(
    db: Session,
    db_statement: models.FinancialStatement,
    payload: schemas.FinancialStatementWrite,
    customer: models.Customer,
):
    _assign(db_statement, payload, customer)
    db.commit()
    db.refresh(db_statement)
    return db_statement


def remove_line(db: Session, db_statement: models.FinancialStatement, section: str, index: int) -> Optional[Dict[str, Any]]:
    """
    Remove row `index` from `section` ("disbursements" or "our_cost") and recompute totals.

    Returns the removed row, or None when the index is out of range.
    """
    rows = list(getattr(db_statement, section) or [])
    if index < 0 or index >= len(rows):
        return None
    removed = rows.pop(index)
    sections = {
        "disbursements": list(db_statement.disbursements or []),
        "our_cost": list(db_statement.our_cost or []),
    }
    sections[section] = rows
    # Reassigning new lists marks the JSON columns dirty
    _apply_lines(db_statement, sections["disbursements"], sections["our_cost"], list(db_statement.summary or []))
    db.commit()
    db.refresh(db_statement)
    return removed


def soft_delete_statement(db: Session, db_statement: models.FinancialStatement):
    db_statement.is_delete = True
    db.commit()
    return db_statement
