"""
Currency repository functions.

Currency codes are unique among non-deleted rows; the pre-query is
`get_currency_by_code`.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate

CURRENCY_SORT_FIELDS = {
    "currencyName": models.Currency.currency_name,
    "currencyCode": models.Currency.currency_code,
    "exchangeRate": models.Currency.exchange_rate,
    "createdAt": models.Currency.created_at,
}


def get_currency(db: Session, currency_id: int):
    return (
        db.query(models.Currency)
        .filter(models.Currency.id == currency_id, models.Currency.is_delete.is_(False))
        .first()
    )


def get_currency_by_code(db: Session, code: str, *, exclude_id: Optional[int] = None):
    q = db.query(models.Currency).filter(
        models.Currency.currency_code == code.strip(),
        models.Currency.is_delete.is_(False),
    )
    if exclude_id is not None:
        q = q.filter(models.Currency.id != exclude_id)
    return q.first()


def get_currencies(
    db: Session,
    params: PageParams,
    *,
    search: Optional[str] = None,
    is_crypto: Optional[bool] = None,
    sort_by: str = "currencyName",
    order: str = "asc",
):
    q = db.query(models.Currency).filter(models.Currency.is_delete.is_(False))
    if search:
        pattern = f"%{search.strip()}%"
        q = q.filter(or_(models.Currency.currency_name.ilike(pattern), models.Currency.currency_code.ilike(pattern)))
    if is_crypto is not None:
        q = q.filter(models.Currency.is_crypto.is_(is_crypto))
    column = CURRENCY_SORT_FIELDS.get(sort_by, models.Currency.currency_name)
    q = ordered(q, column, order, models.Currency.id)
    return paginate(q, params)


def get_all_currencies(db: Session) -> List[models.Currency]:
    return (
        db.query(models.Currency)
        .filter(models.Currency.is_delete.is_(False))
        .order_by(models.Currency.currency_name.asc(), models.Currency.id.asc())
        .all()
    )


def build_currency(currency: schemas.CurrencyCreate) -> models.Currency:
    data = currency.model_dump()
    data["currency_code"] = data["currency_code"].strip()
    return models.Currency(**data)


def create_currency(db: Session, currency: schemas.CurrencyCreate):
    db_currency = build_currency(currency)
    db.add(db_currency)
    db.commit()
    db.refresh(db_currency)
    return db_currency


def update_currency(db: Session, db_currency: models.Currency, currency: schemas.CurrencyUpdate):
    update_data = currency.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if value is None and key != "customer_id":
            continue
        setattr(db_currency, key, value)
    db.commit()
    db.refresh(db_currency)
    return db_currency


def soft_delete_currency(db: Session, db_currency: models.Currency):
    db_currency.is_delete = True
    db.commit()
    return db_currency
