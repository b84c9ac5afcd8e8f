"""
User repository functions.

Users are soft-deleted; email uniqueness is checked by the callers through
`get_user_by_email` before inserts and email changes.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate
from vhr.utils.security import hash_password


def get_user(db: Session, user_id: int, *, include_deleted: bool = False):
    q = db.query(models.User).filter(models.User.id == user_id)
    if not include_deleted:
        q = q.filter(models.User.is_delete.is_(False))
    return q.first()


def get_user_by_email(db: Session, email: str, *, exclude_id: Optional[int] = None):
    q = db.query(models.User).filter(
        models.User.email == email.strip().lower(),
        models.User.is_delete.is_(False),
    )
    if exclude_id is not None:
        q = q.filter(models.User.id != exclude_id)
    return q.first()


def get_users(
    db: Session,
    params: PageParams,
    *,
    search: Optional[str] = None,
    role: Optional[str] = None,
    order: str = "desc",
):
    q = db.query(models.User).filter(models.User.is_delete.is_(False))
    if search:
        pattern = f"%{search.strip()}%"
        q = q.filter(or_(models.User.name.ilike(pattern), models.User.email.ilike(pattern)))
    if role:
        q = q.filter(models.User.role == role)
    q = ordered(q, models.User.created_at, order, models.User.id)
    return paginate(q, params)


def create_user(db: Session, user: schemas.UserCreate):
    db_user = models.User(
        name=user.name.strip(),
        email=str(user.email).strip().lower(),
        password=hash_password(user.password),
        role=user.role.value if user.role else "user",
        user_group_id=user.user_group_id,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def update_user(db: Session, db_user: models.User, user: schemas.UserUpdate):
    update_data = user.model_dump(exclude_unset=True)
    if "password" in update_data:
        password = update_data.pop("password")
        if password:
            db_user.password = hash_password(password)
    if update_data.get("email"):
        update_data["email"] = str(update_data["email"]).strip().lower()
    if update_data.get("role") is not None:
        update_data["role"] = getattr(update_data["role"], "value", update_data["role"])
    for key, value in update_data.items():
        if value is None and key != "user_group_id":
            continue
        setattr(db_user, key, value)
    db.commit()
    db.refresh(db_user)
    return db_user


def soft_delete_user(db: Session, db_user: models.User):
    db_user.is_delete = True
    db.commit()
    return db_user


def set_user_otp(db: Session, db_user: models.User, otp_hash: Optional[str], expires_at):
    db_user.otp = otp_hash
    db_user.otp_expiry = expires_at
    db.commit()
    db.refresh(db_user)
    return db_user


def set_user_password(db: Session, db_user: models.User, password: str):
    db_user.password = hash_password(password)
    db_user.otp = None
    db_user.otp_expiry = None
    db.commit()
    db.refresh(db_user)
    return db_user
