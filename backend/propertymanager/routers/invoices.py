# backend/propertymanager/routers/invoices.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..models import Contract, Invoice
from ..schemas import InvoiceCreate, InvoiceListItem, InvoiceOut, InvoiceUpdate, InvoiceWithRelations
from ..services.records import create_row, delete_row, must_reference, update_row
from ..services.relations import invoice_with_relations, list_invoices

router = APIRouter(prefix="/invoices", tags=["invoices"])

DUPLICATE_OR_INVALID = "Invalid invoice data (invoice_number may already exist)"


@router.get("", response_model=list[InvoiceListItem])
def get_invoices(
    contract_id: Optional[int] = Query(default=None),
    status: Optional[str] = Query(default=None, description="pending|paid|overdue"),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    return list_invoices(db, contract_id=contract_id, status=status, limit=limit)


@router.post("", response_model=InvoiceOut, status_code=201)
def post_invoice(payload: InvoiceCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_reference(db, Contract, payload.contract_id, label="contract")
    return create_row(db, Invoice, payload, detail=DUPLICATE_OR_INVALID)


@router.get("/{invoice_id}", response_model=InvoiceWithRelations)
def get_invoice(invoice_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    return invoice_with_relations(db, invoice_id)


@router.put("/{invoice_id}", response_model=InvoiceOut)
def put_invoice(
    invoice_id: int,
    payload: InvoiceUpdate,
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    must_reference(db, Contract, payload.contract_id, label="contract")
    return update_row(db, Invoice, invoice_id, payload, detail=DUPLICATE_OR_INVALID)


@router.delete("/{invoice_id}", status_code=204)
def remove_invoice(invoice_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    delete_row(db, Invoice, invoice_id, detail="invoice still has payments")
    return Response(status_code=204)
