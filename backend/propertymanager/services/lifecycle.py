# backend/propertymanager/services/lifecycle.py
"""
Cross-entity lifecycle rules.

Each rule is one unit of work: the primary write and its side effect are
flushed together and committed once, so a failure anywhere rolls back both.

    create_contract  -> property.status = "rented"
    update_contract  -> no side effect; end_date >= start_date on the merged row
    delete_contract  -> property.status = "available" (only if the contract existed)
    create_payment   -> invoice.status  = "paid" when the settlement rule is met
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..config import settings
from ..models import Contract, Invoice, Payment, Property, Tenant
from ..schemas import ContractCreate, ContractUpdate, PaymentCreate
from .records import apply_changes, commit_or_400, must_get, must_reference

log = logging.getLogger(__name__)


def _set_property_status(db: Session, property_id: int, status: str) -> Optional[Property]:
    prop = db.get(Property, property_id)
    if prop is None:
        return None
    prop.status = status
    prop.updated_at = datetime.utcnow()
    db.add(prop)
    return prop


def create_contract(db: Session, payload: ContractCreate) -> Contract:
    must_reference(db, Property, payload.property_id, label="property")
    must_reference(db, Tenant, payload.tenant_id, label="tenant")

    row = Contract(**payload.model_dump())
    db.add(row)
    _set_property_status(db, payload.property_id, "rented")
    commit_or_400(db, detail="Invalid contract data")
    db.refresh(row)

    log.info(
        "contract created; property marked rented",
        extra={"contract_id": row.id, "property_id": row.property_id},
    )
    return row


def delete_contract(db: Session, contract_id: int) -> bool:
    row = db.get(Contract, contract_id)
    if row is None:
        return False

    property_id = int(row.property_id)
    db.delete(row)
    _set_property_status(db, property_id, "available")
    commit_or_400(db, detail="contract is still referenced by other records")

    log.info(
        "contract deleted; property marked available",
        extra={"contract_id": contract_id, "property_id": property_id},
    )
    return True


def settled_amount(db: Session, invoice: Invoice, payment: Payment) -> float:
    """
    Amount compared against the invoice total.

    single:     only the incoming payment counts (partial payments are not summed)
    cumulative: every non-failed payment recorded against the invoice counts,
                the incoming one included
    """
    if settings.invoice_settlement_mode == "cumulative":
        q = (
            select(func.coalesce(func.sum(Payment.amount), 0.0))
            .where(Payment.invoice_id == invoice.id)
            .where(Payment.status != "failed")
        )
        if payment.id is not None:
            q = q.where(Payment.id != payment.id)
        earlier = float(db.scalar(q) or 0.0)
        incoming = 0.0 if payment.status == "failed" else float(payment.amount)
        return earlier + incoming
    return float(payment.amount)


def create_payment(db: Session, payload: PaymentCreate) -> Payment:
    invoice = must_reference(db, Invoice, payload.invoice_id, label="invoice")

    row = Payment(**payload.model_dump())
    db.add(row)

    paid = settled_amount(db, invoice, row)
    if paid >= float(invoice.amount):
        invoice.status = "paid"
        invoice.updated_at = datetime.utcnow()
        db.add(invoice)

    commit_or_400(db, detail="Invalid payment data")
    db.refresh(row)

    log.info(
        "payment recorded; invoice status=%s",
        invoice.status,
        extra={"payment_id": row.id, "invoice_id": row.invoice_id},
    )
    return row


def update_contract(db: Session, contract_id: int, payload: ContractUpdate) -> Contract:
    """
    Plain field update. Property status only follows create/delete, but the
    date range is checked against the merged row so a PUT cannot store what
    a POST would reject.
    """
    row = must_get(db, Contract, contract_id)
    must_reference(db, Property, payload.property_id, label="property")
    must_reference(db, Tenant, payload.tenant_id, label="tenant")

    changes = payload.model_dump(exclude_unset=True)
    start = changes.get("start_date") or row.start_date
    end = changes.get("end_date") or row.end_date
    if end < start:
        raise HTTPException(status_code=400, detail="end_date cannot be before start_date")

    apply_changes(row, changes)
    db.add(row)
    commit_or_400(db, detail="Invalid contract data")
    db.refresh(row)
    return row
