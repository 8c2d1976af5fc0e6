# backend/propertymanager/routers/tenants.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..models import Tenant
from ..schemas import TenantCreate, TenantOut, TenantUpdate
from ..services.records import create_row, delete_row, list_rows, must_get, update_row

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("", response_model=list[TenantOut])
def list_tenants(
    is_active: Optional[bool] = Query(default=None),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    return list_rows(db, Tenant, limit=limit, is_active=is_active)


@router.post("", response_model=TenantOut, status_code=201)
def create_tenant(payload: TenantCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    data = payload.model_dump()
    data["email"] = data["email"].strip().lower()
    return create_row(db, Tenant, data, detail="Invalid tenant data (email may already be in use)")


@router.get("/{tenant_id}", response_model=TenantOut)
def get_tenant(tenant_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    return must_get(db, Tenant, tenant_id, label="Tenant")


@router.put("/{tenant_id}", response_model=TenantOut)
def update_tenant(
    tenant_id: int,
    payload: TenantUpdate,
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("email"):
        changes["email"] = changes["email"].strip().lower()
    return update_row(db, Tenant, tenant_id, changes, detail="Invalid tenant data (email may already be in use)")


@router.delete("/{tenant_id}", status_code=204)
def delete_tenant(tenant_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    delete_row(db, Tenant, tenant_id, detail="tenant still has contracts")
    return Response(status_code=204)
