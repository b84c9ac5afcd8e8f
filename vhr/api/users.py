"""
User management endpoints (super_admin only), including effective
permission resolution.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, page_params
from vhr.db import schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, normalize_order, page_payload
from vhr.db.repositories import user_groups as groups_repo
from vhr.db.repositories import users as users_repo
from vhr.services.permission_service import resolve_effective_permissions
from vhr.utils.role_permissions import SUPER_ADMIN_ONLY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

super_admin = authorize(SUPER_ADMIN_ONLY)


def _ensure_group(db: Session, group_id: Optional[int]) -> None:
    if group_id is not None and groups_repo.get_user_group(db, group_id) is None:
        raise HTTPException(status_code=404, detail="User group not found")


@router.get("", response_model=schemas.Page[schemas.User])
def list_users_endpoint(
    params: PageParams = Depends(page_params),
    search: Optional[str] = None,
    role: Optional[str] = None,
    order: Optional[str] = None,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    users, total = users_repo.get_users(db, params, search=search, role=role, order=normalize_order(order, "desc"))
    return page_payload(users, total, params)


@router.post("", response_model=schemas.Envelope[schemas.User], status_code=status.HTTP_201_CREATED)
def create_user_endpoint(user: schemas.UserCreate, db: Session = Depends(get_db), _user=Depends(super_admin)):
    if users_repo.get_user_by_email(db, str(user.email)):
        raise HTTPException(status_code=409, detail="User with this email already exists")
    _ensure_group(db, user.user_group_id)
    created = users_repo.create_user(db, user)
    logger.info(f"Created user {created.id} with role {created.role}")
    return {"success": True, "data": created, "message": "User created successfully"}


@router.get("/{user_id}/permissions", response_model=schemas.Envelope[schemas.EffectivePermissions])
def get_user_permissions_endpoint(user_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    resolved = resolve_effective_permissions(db, user_id)
    if resolved is None:
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True, "data": resolved}


@router.get("/{user_id}", response_model=schemas.Envelope[schemas.User])
def get_user_endpoint(user_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    user = users_repo.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True, "data": user}


@router.put("/{user_id}", response_model=schemas.Envelope[schemas.User])
def update_user_endpoint(
    user_id: int,
    user: schemas.UserUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_user = users_repo.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    if user.email and users_repo.get_user_by_email(db, str(user.email), exclude_id=db_user.id):
        raise HTTPException(status_code=409, detail="User with this email already exists")
    _ensure_group(db, user.user_group_id)
    updated = users_repo.update_user(db, db_user, user)
    logger.info(f"Updated user {updated.id}")
    return {"success": True, "data": updated, "message": "User updated successfully"}


@router.delete("/{user_id}", response_model=schemas.MessageResponse)
def delete_user_endpoint(user_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    db_user = users_repo.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    users_repo.soft_delete_user(db, db_user)
    logger.info(f"Deleted user {user_id}")
    return {"success": True, "message": "User deleted successfully"}
