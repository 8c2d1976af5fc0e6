# backend/propertymanager/routers/properties.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..models import Property
from ..schemas import PropertyCreate, PropertyOut, PropertyUpdate, PropertyWithRelations
from ..services.records import create_row, delete_row, list_rows, update_row
from ..services.relations import property_with_relations

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=list[PropertyOut])
def list_properties(
    status: Optional[str] = Query(default=None, description="available|rented|maintenance"),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    return list_rows(db, Property, limit=limit, status=status)


@router.post("", response_model=PropertyOut, status_code=201)
def create_property(payload: PropertyCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    return create_row(db, Property, payload, detail="Invalid property data")


@router.get("/{property_id}", response_model=PropertyWithRelations)
def get_property(property_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    return property_with_relations(db, property_id)


@router.put("/{property_id}", response_model=PropertyOut)
def update_property(
    property_id: int,
    payload: PropertyUpdate,
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    return update_row(db, Property, property_id, payload, detail="Invalid property data")


@router.delete("/{property_id}", status_code=204)
def delete_property(property_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    delete_row(db, Property, property_id, detail="property still has contracts or maintenance requests")
    return Response(status_code=204)
