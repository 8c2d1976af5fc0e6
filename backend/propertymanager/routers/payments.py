# backend/propertymanager/routers/payments.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..models import Payment
from ..schemas import PaymentCreate, PaymentOut, PaymentUpdate, PaymentWithRelations
from ..services.lifecycle import create_payment
from ..services.records import delete_row, update_row
from ..services.relations import list_payments, payment_with_relations

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("", response_model=list[PaymentWithRelations])
def get_payments(
    invoice_id: Optional[int] = Query(default=None),
    status: Optional[str] = Query(default=None, description="pending|completed|failed"),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    return list_payments(db, invoice_id=invoice_id, status=status, limit=limit)


@router.post("", response_model=PaymentOut, status_code=201)
def post_payment(payload: PaymentCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    return create_payment(db, payload)


@router.get("/{payment_id}", response_model=PaymentWithRelations)
def get_payment(payment_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    return payment_with_relations(db, payment_id)


@router.put("/{payment_id}", response_model=PaymentOut)
def put_payment(
    payment_id: int,
    payload: PaymentUpdate,
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    # invoice status is only recomputed when a payment is created
    return update_row(db, Payment, payment_id, payload, detail="Invalid payment data")


@router.delete("/{payment_id}", status_code=204)
def remove_payment(payment_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    delete_row(db, Payment, payment_id)
    return Response(status_code=204)
