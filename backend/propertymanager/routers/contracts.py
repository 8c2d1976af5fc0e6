# backend/propertymanager/routers/contracts.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..schemas import (
    ContractCreate,
    ContractListItem,
    ContractOut,
    ContractUpdate,
    ContractWithRelations,
)
from ..services.lifecycle import create_contract, delete_contract, update_contract
from ..services.relations import contract_with_relations, list_contracts

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.get("", response_model=list[ContractListItem])
def get_contracts(
    property_id: Optional[int] = Query(default=None),
    tenant_id: Optional[int] = Query(default=None),
    status: Optional[str] = Query(default=None, description="active|expired|terminated"),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    return list_contracts(db, property_id=property_id, tenant_id=tenant_id, status=status, limit=limit)


@router.post("", response_model=ContractOut, status_code=201)
def post_contract(payload: ContractCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    return create_contract(db, payload)


@router.get("/{contract_id}", response_model=ContractWithRelations)
def get_contract(contract_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    return contract_with_relations(db, contract_id)


@router.put("/{contract_id}", response_model=ContractOut)
def put_contract(
    contract_id: int,
    payload: ContractUpdate,
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    return update_contract(db, contract_id, payload)


@router.delete("/{contract_id}", status_code=204)
def remove_contract(contract_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    delete_contract(db, contract_id)
    return Response(status_code=204)
