"""
Business taxonomy endpoints.

Business types, business entities and practice areas share one route
shape, registered by `_register_named_routes`. Subcategories, custom field
groups and custom fields hang off practice areas. Reads accept both roles;
writes are super_admin only.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, page_params
from vhr.db import models, schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, normalize_order, page_payload
from vhr.db.repositories import business as business_repo
from vhr.utils.role_permissions import ALL_ROLES, SUPER_ADMIN_ONLY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/business", tags=["business"])

super_admin = authorize(SUPER_ADMIN_ONLY)
any_role = authorize(ALL_ROLES)


def _register_named_routes(path: str, model, label: str) -> None:
    not_found = f"{label} not found"
    conflict = f"{label} with this name already exists"

    def _get_or_404(db: Session, item_id: int):
        item = business_repo.get_named(db, model, item_id)
        if item is None:
            raise HTTPException(status_code=404, detail=not_found)
        return item

    @router.post(f"/{path}", response_model=schemas.Envelope[schemas.NamedItem], status_code=status.HTTP_201_CREATED, operation_id=f"create_{path}")
    def create_item(item: schemas.NamedItemCreate, db: Session = Depends(get_db), _user=Depends(super_admin)):
        if business_repo.get_named_by_name(db, model, item.name):
            raise HTTPException(status_code=409, detail=conflict)
        created = business_repo.create_named(db, model, item)
        logger.info(f"Created {label.lower()} {created.id} '{created.name}'")
        return {"success": True, "data": created, "message": f"{label} created successfully"}

    @router.get(f"/{path}", response_model=schemas.Page[schemas.NamedItem], operation_id=f"list_{path}")
    def list_items(
        params: PageParams = Depends(page_params),
        search: Optional[str] = None,
        order: Optional[str] = None,
        db: Session = Depends(get_db),
        _user=Depends(any_role),
    ):
        items, total = business_repo.get_named_items(
            db, model, params, search=search, order=normalize_order(order, "desc")
        )
        return page_payload(items, total, params)

    @router.get(f"/{path}/{{item_id}}", response_model=schemas.Envelope[schemas.NamedItem], operation_id=f"get_{path}")
    def get_item(item_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
        return {"success": True, "data": _get_or_404(db, item_id)}

    @router.put(f"/{path}/{{item_id}}", response_model=schemas.Envelope[schemas.NamedItem], operation_id=f"update_{path}")
    def update_item(
        item_id: int,
        item: schemas.NamedItemCreate,
        db: Session = Depends(get_db),
        _user=Depends(super_admin),
    ):
        db_item = _get_or_404(db, item_id)
        if business_repo.get_named_by_name(db, model, item.name, exclude_id=db_item.id):
            raise HTTPException(status_code=409, detail=conflict)
        updated = business_repo.rename_named(db, db_item, item.name)
        logger.info(f"Renamed {label.lower()} {updated.id} to '{updated.name}'")
        return {"success": True, "data": updated, "message": f"{label} updated successfully"}

    @router.delete(f"/{path}/{{item_id}}", response_model=schemas.MessageResponse, operation_id=f"delete_{path}")
    def delete_item(item_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
        business_repo.soft_delete(db, _get_or_404(db, item_id))
        logger.info(f"Deleted {label.lower()} {item_id}")
        return {"success": True, "message": f"{label} deleted successfully"}


_register_named_routes("type", models.BusinessType, "Business type")
_register_named_routes("entity", models.BusinessEntity, "Business entity")
_register_named_routes("area", models.BusinessPracticeArea, "Practice area")


def _require_practice_area(db: Session, area_id: Optional[int]) -> None:
    if area_id is not None and business_repo.get_named(db, models.BusinessPracticeArea, area_id) is None:
        raise HTTPException(status_code=404, detail="Practice area not found")


def _require_subcategory(db: Session, subcategory_id: Optional[int]):
    if subcategory_id is None:
        return None
    subcategory = business_repo.get_subcategory(db, subcategory_id)
    if subcategory is None:
        raise HTTPException(status_code=404, detail="Subcategory not found")
    return subcategory


def _require_field_group(db: Session, group_id: Optional[int]):
    if group_id is None:
        return None
    group = business_repo.get_field_group(db, group_id)
    if group is None:
        raise HTTPException(status_code=404, detail="Custom field group not found")
    return group


@router.get("/area/{item_id}/subcategories", response_model=schemas.Page[schemas.Subcategory])
def list_area_subcategories_endpoint(
    item_id: int,
    params: PageParams = Depends(page_params),
    search: Optional[str] = None,
    order: Optional[str] = None,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    _require_practice_area(db, item_id)
    items, total = business_repo.get_subcategories(
        db, params, search=search, practice_area_id=item_id, order=normalize_order(order, "desc")
    )
    return page_payload(items, total, params)


# Subcategories

@router.post("/subcategory", response_model=schemas.Envelope[schemas.Subcategory], status_code=status.HTTP_201_CREATED)
def create_subcategory_endpoint(
    subcategory: schemas.SubcategoryCreate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    _require_practice_area(db, subcategory.practice_area_id)
    created = business_repo.create_subcategory(db, subcategory)
    logger.info(f"Created subcategory {created.id}")
    return {"success": True, "data": created, "message": "Subcategory created successfully"}


@router.get("/subcategory", response_model=schemas.Page[schemas.Subcategory])
def list_subcategories_endpoint(
    params: PageParams = Depends(page_params),
    search: Optional[str] = None,
    practice_area_id: Optional[int] = Query(default=None, alias="practiceAreaId"),
    order: Optional[str] = None,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    items, total = business_repo.get_subcategories(
        db, params, search=search, practice_area_id=practice_area_id, order=normalize_order(order, "desc")
    )
    return page_payload(items, total, params)


@router.get("/subcategory/{subcategory_id}", response_model=schemas.Envelope[schemas.Subcategory])
def get_subcategory_endpoint(subcategory_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    return {"success": True, "data": _require_subcategory(db, subcategory_id)}


@router.put("/subcategory/{subcategory_id}", response_model=schemas.Envelope[schemas.Subcategory])
def update_subcategory_endpoint(
    subcategory_id: int,
    subcategory: schemas.SubcategoryUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_subcategory = _require_subcategory(db, subcategory_id)
    _require_practice_area(db, subcategory.practice_area_id)
    updated = business_repo.update_subcategory(db, db_subcategory, subcategory)
    logger.info(f"Updated subcategory {updated.id}")
    return {"success": True, "data": updated, "message": "Subcategory updated successfully"}


@router.delete("/subcategory/{subcategory_id}", response_model=schemas.MessageResponse)
def delete_subcategory_endpoint(subcategory_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    business_repo.soft_delete(db, _require_subcategory(db, subcategory_id))
    logger.info(f"Deleted subcategory {subcategory_id}")
    return {"success": True, "message": "Subcategory deleted successfully"}


# Custom field groups

@router.post("/field-group", response_model=schemas.Envelope[schemas.CustomFieldGroup], status_code=status.HTTP_201_CREATED)
def create_field_group_endpoint(
    group: schemas.CustomFieldGroupCreate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    _require_subcategory(db, group.subcategory_id)
    created = business_repo.create_field_group(db, group)
    logger.info(f"Created custom field group {created.id}")
    return {"success": True, "data": created, "message": "Custom field group created successfully"}


@router.get("/field-group", response_model=schemas.Page[schemas.CustomFieldGroup])
def list_field_groups_endpoint(
    params: PageParams = Depends(page_params),
    search: Optional[str] = None,
    subcategory_id: Optional[int] = Query(default=None, alias="subcategoryId"),
    order: Optional[str] = None,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    items, total = business_repo.get_field_groups(
        db, params, search=search, subcategory_id=subcategory_id, order=normalize_order(order, "desc")
    )
    return page_payload(items, total, params)


@router.get("/field-group/{group_id}", response_model=schemas.Envelope[schemas.CustomFieldGroupDetail])
def get_field_group_endpoint(group_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    return {"success": True, "data": _require_field_group(db, group_id)}


@router.put("/field-group/{group_id}", response_model=schemas.Envelope[schemas.CustomFieldGroup])
def update_field_group_endpoint(
    group_id: int,
    group: schemas.CustomFieldGroupUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_group = _require_field_group(db, group_id)
    _require_subcategory(db, group.subcategory_id)
    updated = business_repo.update_field_group(db, db_group, group)
    logger.info(f"Updated custom field group {updated.id}")
    return {"success": True, "data": updated, "message": "Custom field group updated successfully"}


@router.delete("/field-group/{group_id}", response_model=schemas.MessageResponse)
def delete_field_group_endpoint(group_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    business_repo.soft_delete(db, _require_field_group(db, group_id))
    logger.info(f"Deleted custom field group {group_id}")
    return {"success": True, "message": "Custom field group deleted successfully"}


# Custom fields

@router.post("/field", response_model=schemas.Envelope[schemas.CustomField], status_code=status.HTTP_201_CREATED)
def create_custom_field_endpoint(
    field: schemas.CustomFieldCreate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    _require_practice_area(db, field.practice_area_id)
    _require_field_group(db, field.field_group_id)
    created = business_repo.create_custom_field(db, field)
    logger.info(f"Created custom field {created.id} of type {created.type}")
    return {"success": True, "data": created, "message": "Custom field created successfully"}


@router.get("/field", response_model=schemas.Page[schemas.CustomField])
def list_custom_fields_endpoint(
    params: PageParams = Depends(page_params),
    search: Optional[str] = None,
    field_group_id: Optional[int] = Query(default=None, alias="fieldGroupId"),
    practice_area_id: Optional[int] = Query(default=None, alias="practiceAreaId"),
    order: Optional[str] = None,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    items, total = business_repo.get_custom_fields(
        db,
        params,
        search=search,
        field_group_id=field_group_id,
        practice_area_id=practice_area_id,
        order=normalize_order(order, "desc"),
    )
    return page_payload(items, total, params)


@router.get("/field/{field_id}", response_model=schemas.Envelope[schemas.CustomField])
def get_custom_field_endpoint(field_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    field = business_repo.get_custom_field(db, field_id)
    if field is None:
        raise HTTPException(status_code=404, detail="Custom field not found")
    return {"success": True, "data": field}


@router.put("/field/{field_id}", response_model=schemas.Envelope[schemas.CustomField])
def update_custom_field_endpoint(
    field_id: int,
    field: schemas.CustomFieldUpdate,
    db: Session = Depends(get_db),
    _user=Depends(super_admin),
):
    db_field = business_repo.get_custom_field(db, field_id)
    if db_field is None:
        raise HTTPException(status_code=404, detail="Custom field not found")
    _require_practice_area(db, field.practice_area_id)
    _require_field_group(db, field.field_group_id)
    updated = business_repo.update_custom_field(db, db_field, field)
    logger.info(f"Updated custom field {updated.id}")
    return {"success": True, "data": updated, "message": "Custom field updated successfully"}


@router.delete("/field/{field_id}", response_model=schemas.MessageResponse)
def delete_custom_field_endpoint(field_id: int, db: Session = Depends(get_db), _user=Depends(super_admin)):
    db_field = business_repo.get_custom_field(db, field_id)
    if db_field is None:
        raise HTTPException(status_code=404, detail="Custom field not found")
    business_repo.soft_delete(db, db_field)
    logger.info(f"Deleted custom field {field_id}")
    return {"success": True, "message": "Custom field deleted successfully"}
