from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from vhr.db import models, schemas
from vhr.db.pagination import PageParams, ordered, paginate


def get_note(db: Session, note_id: int):
    return (
        db.query(models.Note)
        .filter(models.Note.id == note_id, models.Note.is_delete.is_(False))
        .first()
    )


def get_notes(
    db: Session,
    params: PageParams,
    *,
    customer_id: Optional[int] = None,
    note_type: Optional[str] = None,
    search: Optional[str] = None,
    order: str = "desc",
):
    q = db.query(models.Note).filter(models.Note.is_delete.is_(False))
    if customer_id is not None:
        q = q.filter(models.Note.customer_id == customer_id)
    if note_type:
        q = q.filter(models.Note.type == note_type)
    if search:
        q = q.filter(models.Note.title.ilike(f"%{search.strip()}%"))
    q = ordered(q, models.Note.created_at, order, models.Note.id)
    return paginate(q, params)


def get_customer_notes(db: Session, customer_id: int) -> List[models.Note]:
    return (
        db.query(models.Note)
        .filter(models.Note.customer_id == customer_id, models.Note.is_delete.is_(False))
        .order_by(models.Note.created_at.desc(), models.Note.id.desc())
        .all()
    )


def create_note(db: Session, note: schemas.NoteCreate):
    db_note = models.Note(**note.model_dump())
    db.add(db_note)
    db.commit()
    db.refresh(db_note)
    return db_note


def update_note(db: Session, db_note: models.Note, note: schemas.NoteUpdate):
    update_data = note.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if value is None:
            continue
        setattr(db_note, key, value)
    db.commit()
    db.refresh(db_note)
    return db_note


def soft_delete_note(db: Session, db_note: models.Note):
    db_note.is_delete = True
    db.commit()
    return db_note
