# backend/propertymanager/services/records.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Type, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel
from sqlalchemy import select, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import Base

log = logging.getLogger(__name__)

M = TypeVar("M", bound=Base)


def _label(model: Type[Base]) -> str:
    return getattr(model, "__label__", None) or model.__name__.lower()


def must_get(db: Session, model: Type[M], row_id: int, *, label: str | None = None) -> M:
    row = db.get(model, row_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"{label or _label(model).capitalize()} not found")
    return row


def must_reference(db: Session, model: Type[M], row_id: Optional[int], *, label: str) -> Optional[M]:
    """
    Payload-side lookup: a foreign key in a request body that points nowhere is
    a validation failure (400), not a missing resource.
    """
    if row_id is None:
        return None
    row = db.get(model, int(row_id))
    if row is None:
        raise HTTPException(status_code=400, detail=f"{label} {row_id} does not exist")
    return row


def list_rows(db: Session, model: Type[M], *, limit: int = 200, **filters: Any) -> list[M]:
    q = select(model)
    for k, v in filters.items():
        if v is not None:
            q = q.where(getattr(model, k) == v)
    q = q.order_by(desc(model.created_at), desc(model.id)).limit(int(limit))
    return list(db.scalars(q).all())


def commit_or_400(db: Session, *, detail: str) -> None:
    """
    Commit the pending unit of work. Integrity violations (unique keys, FK
    references) roll back everything pending and surface as 400.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        log.info("integrity violation (%s): %s", detail, e.orig)
        raise HTTPException(status_code=400, detail=detail)


def create_row(db: Session, model: Type[M], payload: BaseModel | dict[str, Any], *, detail: str | None = None) -> M:
    data = payload.model_dump() if isinstance(payload, BaseModel) else dict(payload)
    row = model(**data)
    db.add(row)
    commit_or_400(db, detail=detail or f"Invalid {_label(model)} data")
    db.refresh(row)
    return row


def apply_changes(row: Base, changes: dict[str, Any]) -> Base:
    for k, v in changes.items():
        setattr(row, k, v)
    row.updated_at = datetime.utcnow()
    return row


def update_row(
    db: Session,
    model: Type[M],
    row_id: int,
    payload: BaseModel | dict[str, Any],
    *,
    detail: str | None = None,
) -> M:
    """Partial update: only fields present in the payload are written."""
    row = must_get(db, model, row_id)
    changes = payload.model_dump(exclude_unset=True) if isinstance(payload, BaseModel) else dict(payload)

    apply_changes(row, changes)
    db.add(row)
    commit_or_400(db, detail=detail or f"Invalid {_label(model)} data")
    db.refresh(row)
    return row


def delete_row(db: Session, model: Type[M], row_id: int, *, detail: str | None = None) -> bool:
    """
    Delete by id. A missing id is a no-op and returns False; callers still
    answer 204.
    """
    row = db.get(model, row_id)
    if row is None:
        return False
    db.delete(row)
    commit_or_400(db, detail=detail or f"{_label(model)} is still referenced by other records")
    return True
