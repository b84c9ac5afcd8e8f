"""Note endpoints (both roles)."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhr.api.deps import authorize, page_params
from vhr.db import schemas
from vhr.db.database import get_db
from vhr.db.pagination import PageParams, normalize_order, page_payload
from vhr.db.repositories import notes as notes_repo
from vhr.utils.role_permissions import ALL_ROLES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["notes"])

any_role = authorize(ALL_ROLES)


@router.post("", response_model=schemas.Envelope[schemas.Note], status_code=status.HTTP_201_CREATED)
def create_note_endpoint(note: schemas.NoteCreate, db: Session = Depends(get_db), _user=Depends(any_role)):
    created = notes_repo.create_note(db, note)
    logger.info(f"Created note {created.id} for customer {created.customer_id}")
    return {"success": True, "data": created, "message": "Note created successfully"}


@router.get("", response_model=schemas.Page[schemas.Note])
def list_notes_endpoint(
    params: PageParams = Depends(page_params),
    customer_id: Optional[int] = Query(default=None, alias="customerId"),
    note_type: Optional[str] = Query(default=None, alias="type"),
    search: Optional[str] = None,
    order: Optional[str] = None,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    notes, total = notes_repo.get_notes(
        db,
        params,
        customer_id=customer_id,
        note_type=note_type,
        search=search,
        order=normalize_order(order, "desc"),
    )
    return page_payload(notes, total, params)


@router.get("/customer/{customer_id}", response_model=schemas.Envelope[List[schemas.Note]])
def customer_notes_endpoint(customer_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    return {"success": True, "data": notes_repo.get_customer_notes(db, customer_id)}


@router.get("/{note_id}", response_model=schemas.Envelope[schemas.Note])
def get_note_endpoint(note_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    note = notes_repo.get_note(db, note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return {"success": True, "data": note}


@router.put("/{note_id}", response_model=schemas.Envelope[schemas.Note])
def update_note_endpoint(
    note_id: int,
    note: schemas.NoteUpdate,
    db: Session = Depends(get_db),
    _user=Depends(any_role),
):
    db_note = notes_repo.get_note(db, note_id)
    if db_note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    updated = notes_repo.update_note(db, db_note, note)
    logger.info(f"Updated note {updated.id}")
    return {"success": True, "data": updated, "message": "Note updated successfully"}


@router.delete("/{note_id}", response_model=schemas.MessageResponse)
def delete_note_endpoint(note_id: int, db: Session = Depends(get_db), _user=Depends(any_role)):
    db_note = notes_repo.get_note(db, note_id)
    if db_note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    notes_repo.soft_delete_note(db, db_note)
    logger.info(f"Deleted note {note_id}")
    return {"success": True, "message": "Note deleted successfully"}
