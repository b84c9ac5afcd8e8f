"""
User group endpoints (super_admin only).

Groups carry a default permission record and custom per-module overrides;
every response includes the number of live users assigned to the group.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, page_params
from vhr.db import models, schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, normalize_order, page_payload
from vhr.db.repositories import user_groups as groups_repo
from vhr.utils.role_permissions import SUPER_ADMIN_ONLY, remove_custom_permission, upsert_custom_permission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user-groups", tags=["user-groups"])

super_admin = authorize(SUPER_ADMIN_ONLY)


def _with_count(group: models.UserGroup, user_count: int) -> schemas.UserGroup:
    return schemas.UserGroup.model_validate(group).model_copy(update={"user_count": user_count})


def _get_or_404(db: Session, group_id: int) -> models.UserGroup:
    group = groups_repo.get_user_group(db, group_id)
    if group is None:
        raise HTTPException(status_code=404, detail="User group not found")
    return group


@router.post("", response_model=schemas.Envelope[schemas.UserGroup], status_code=status.HTTP_201_CREATED)
def create_user_group_endpoint(
    group: schemas.UserGroupCreate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    if groups_repo.get_user_group_by_title(db, group.title):
        raise HTTPException(status_code=409, detail="User group with this title already exists")
    created = groups_repo.create_user_group(db, group)
    logger.info(f"Created user group {created.id} '{created.title}'")
    return {"success": True, "data": _with_count(created, 0), "message": "User group created successfully"}


@router.get("", response_model=schemas.Page[schemas.UserGroup])
def list_user_groups_endpoint(
    params: PageParams = Depends(page_params),
    search: Optional[str] = None,
    order: Optional[str] = None,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    groups, total = groups_repo.get_user_groups(db, params, search=search, order=normalize_order(order, "desc"))
    counts = groups_repo.count_users_by_group(db, [g.id for g in groups])
    return page_payload([_with_count(g, counts.get(g.id, 0)) for g in groups], total, params)


@router.get("/{group_id}", response_model=schemas.Envelope[schemas.UserGroup])
def get_user_group_endpoint(group_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    group = _get_or_404(db, group_id)
    return {"success": True, "data": _with_count(group, groups_repo.count_group_users(db, group.id))}


@router.put("/{group_id}", response_model=schemas.Envelope[schemas.UserGroup])
def update_user_group_endpoint(
    group_id: int,
    group: schemas.UserGroupUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_group = _get_or_404(db, group_id)
    if group.title and groups_repo.get_user_group_by_title(db, group.title, exclude_id=db_group.id):
        raise HTTPException(status_code=409, detail="User group with this title already exists")
    updated = groups_repo.update_user_group(db, db_group, group)
    logger.info(f"Updated user group {updated.id}")
    return {
        "success": True,
        "data": _with_count(updated, groups_repo.count_group_users(db, updated.id)),
        "message": "User group updated successfully",
    }


@router.delete("/{group_id}", response_model=schemas.MessageResponse)
def delete_user_group_endpoint(group_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    db_group = _get_or_404(db, group_id)
    if groups_repo.count_group_users(db, db_group.id) > 0:
        raise HTTPException(
            status_code=400,
            detail="Cannot delete group with assigned users. Please reassign users first.",
        )
    groups_repo.soft_delete_user_group(db, db_group)
    logger.info(f"Deleted user group {group_id}")
    return {"success": True, "message": "User group deleted successfully"}


@router.get("/{group_id}/users", response_model=schemas.Page[schemas.GroupMember])
def list_group_users_endpoint(
    group_id: int,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    _get_or_404(db, group_id)
    users, total = groups_repo.get_group_users(db, group_id, params)
    return page_payload(users, total, params)


@router.post("/{group_id}/permissions", response_model=schemas.Envelope[schemas.UserGroup])
def add_custom_permission_endpoint(
    group_id: int,
    permission: schemas.CustomPermission,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_group = _get_or_404(db, group_id)
    try:
        updated_list = upsert_custom_permission(db_group.custom_permissions, permission.module, permission.level.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    updated = groups_repo.set_custom_permissions(db, db_group, updated_list)
    logger.info(f"Set custom permission {permission.module}={permission.level.value} on group {group_id}")
    return {
        "success": True,
        "data": _with_count(updated, groups_repo.count_group_users(db, updated.id)),
        "message": "Custom permission added successfully",
    }


@router.delete("/{group_id}/permissions/{module}", response_model=schemas.Envelope[schemas.UserGroup])
def remove_custom_permission_endpoint(
    group_id: int,
    module: str,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_group = _get_or_404(db, group_id)
    remaining = remove_custom_permission(db_group.custom_permissions, module)
    if remaining is None:
        raise HTTPException(status_code=404, detail="Permission not found")
    updated = groups_repo.set_custom_permissions(db, db_group, remaining)
    logger.info(f"Removed custom permission {module} from group {group_id}")
    return {
        "success": True,
        "data": _with_count(updated, groups_repo.count_group_users(db, updated.id)),
        "message": "Custom permission removed successfully",
    }
