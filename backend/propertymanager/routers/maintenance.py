# backend/propertymanager/routers/maintenance.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..models import MaintenanceRequest, Property, Tenant
from ..schemas import MaintenanceCreate, MaintenanceOut, MaintenanceUpdate, MaintenanceWithRelations
from ..services.records import create_row, delete_row, must_reference, update_row
from ..services.relations import list_maintenance, maintenance_with_relations

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.get("", response_model=list[MaintenanceWithRelations])
def get_requests(
    property_id: Optional[int] = Query(default=None),
    status: Optional[str] = Query(default=None, description="pending|in_progress|completed|cancelled"),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    return list_maintenance(db, property_id=property_id, status=status, limit=limit)


@router.post("", response_model=MaintenanceOut, status_code=201)
def post_request(payload: MaintenanceCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_reference(db, Property, payload.property_id, label="property")
    must_reference(db, Tenant, payload.tenant_id, label="tenant")
    return create_row(db, MaintenanceRequest, payload, detail="Invalid maintenance request data")


@router.get("/{request_id}", response_model=MaintenanceWithRelations)
def get_request(request_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    return maintenance_with_relations(db, request_id)


@router.put("/{request_id}", response_model=MaintenanceOut)
def put_request(
    request_id: int,
    payload: MaintenanceUpdate,
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    must_reference(db, Property, payload.property_id, label="property")
    must_reference(db, Tenant, payload.tenant_id, label="tenant")
    return update_row(db, MaintenanceRequest, request_id, payload, detail="Invalid maintenance request data")


@router.delete("/{request_id}", status_code=204)
def remove_request(request_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    delete_row(db, MaintenanceRequest, request_id)
    return Response(status_code=204)
