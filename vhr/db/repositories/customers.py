"""
Customer repository functions.

Customers are soft-deleted. Email verification codes live in their own
table so an unverified address never appears as a customer row.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate
from vhr.utils.security import hash_password

CUSTOMER_SORT_FIELDS = {
    "createdAt": models.Customer.created_at,
    "expiryDate": models.Customer.expiry_date,
    "email": models.Customer.email,
    "id": models.Customer.id,
}


def get_customer(db: Session, customer_id: int):
    return (
        db.query(models.Customer)
        .filter(models.Customer.id == customer_id, models.Customer.is_delete.is_(False))
        .first()
    )


def get_customer_by_email(db: Session, email: str):
    return (
        db.query(models.Customer)
        .filter(models.Customer.email == email.strip().lower(), models.Customer.is_delete.is_(False))
        .first()
    )


def get_customers(
    db: Session,
    params: PageParams,
    *,
    email: Optional[str] = None,
    status: Optional[str] = None,
    business_type: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    sort_by: str = "createdAt",
    order: str = "asc",
    deleted: bool = False,
):
    q = db.query(models.Customer).filter(models.Customer.is_delete.is_(deleted))
    if email:
        q = q.filter(models.Customer.email.ilike(f"%{email.strip()}%"))
    if status:
        q = q.filter(models.Customer.status == status)
    if business_type:
        q = q.filter(models.Customer.business_type == business_type)
    if start:
        q = q.filter(models.Customer.created_at >= start)
    if end:
        q = q.filter(models.Customer.created_at <= end)
    column = CUSTOMER_SORT_FIELDS.get(sort_by, models.Customer.created_at)
    q = ordered(q, column, order, models.Customer.id)
    return paginate(q, params)


def create_customer(db: Session, customer: schemas.CustomerCreate):
    data = customer.model_dump(mode="json", by_alias=False)
    data["email"] = str(customer.email).strip().lower()
    data["password"] = hash_password(customer.password)
    data["expiry_date"] = customer.expiry_date
    db_customer = models.Customer(**data)
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer


def update_customer(db: Session, db_customer: models.Customer, customer: schemas.CustomerUpdate):
    update_data = customer.model_dump(exclude_unset=True)
    if "status" in update_data and update_data["status"] is not None:
        update_data["status"] = getattr(update_data["status"], "value", update_data["status"])
    for key, value in update_data.items():
        if value is None and key not in ("note", "expiry_date"):
            continue
        setattr(db_customer, key, value)
    db.commit()
    db.refresh(db_customer)
    return db_customer


def soft_delete_customer(db: Session, db_customer: models.Customer):
    db_customer.is_delete = True
    db.commit()
    return db_customer


# Email verification

def get_verification(db: Session, email: str):
    return (
        db.query(models.CustomerVerification)
        .filter(models.CustomerVerification.email == email.strip().lower())
        .first()
    )


def upsert_verification_code(db: Session, email: str, code: str, expires_at: datetime):
    verification = get_verification(db, email)
    if verification is None:
        verification = models.CustomerVerification(email=email.strip().lower())
        db.add(verification)
    verification.email_otp = code
    verification.email_otp_expiry = expires_at
    verification.is_email_verified = False
    db.commit()
    db.refresh(verification)
    return verification


def mark_verified(db: Session, verification: models.CustomerVerification):
    verification.is_email_verified = True
    verification.email_otp = None
    verification.email_otp_expiry = None
    db.commit()
    db.refresh(verification)
    return verification
