# backend/propertymanager/services/relations.py
"""
Read-side projections that eager-load related rows for display.

Nothing here writes; every loader returns ORM rows shaped to match one of
the *WithRelations / *ListItem models in schemas.py.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException
from sqlalchemy import desc, select
from sqlalchemy.orm import Session, selectinload

from ..models import Contract, Invoice, MaintenanceRequest, Payment, Property


def _contract_parties():
    return (selectinload(Contract.property), selectinload(Contract.tenant))


def _invoice_contract():
    return selectinload(Invoice.contract).options(*_contract_parties())


def _one(db: Session, stmt, label: str):
    row = db.execute(stmt).scalar_one_or_none()
    if row is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return row


# -------------------- Properties --------------------

def property_with_relations(db: Session, property_id: int) -> Property:
    stmt = (
        select(Property)
        .where(Property.id == property_id)
        .options(
            selectinload(Property.contracts).selectinload(Contract.tenant),
            selectinload(Property.maintenance_requests).selectinload(MaintenanceRequest.tenant),
        )
    )
    return _one(db, stmt, "Property")


# -------------------- Contracts --------------------

def contract_with_relations(db: Session, contract_id: int) -> Contract:
    stmt = (
        select(Contract)
        .where(Contract.id == contract_id)
        .options(*_contract_parties(), selectinload(Contract.invoices))
    )
    return _one(db, stmt, "Contract")


def list_contracts(
    db: Session,
    *,
    property_id: Optional[int] = None,
    tenant_id: Optional[int] = None,
    status: Optional[str] = None,
    limit: int = 200,
) -> list[Contract]:
    q = select(Contract).options(*_contract_parties())
    if property_id is not None:
        q = q.where(Contract.property_id == property_id)
    if tenant_id is not None:
        q = q.where(Contract.tenant_id == tenant_id)
    if status:
        q = q.where(Contract.status == status)
    q = q.order_by(desc(Contract.created_at), desc(Contract.id)).limit(limit)
    return list(db.scalars(q).all())


# -------------------- Invoices --------------------

def invoice_with_relations(db: Session, invoice_id: int) -> Invoice:
    stmt = (
        select(Invoice)
        .where(Invoice.id == invoice_id)
        .options(_invoice_contract(), selectinload(Invoice.payments))
    )
    return _one(db, stmt, "Invoice")


def list_invoices(
    db: Session,
    *,
    contract_id: Optional[int] = None,
    status: Optional[str] = None,
    limit: int = 200,
) -> list[Invoice]:
    q = select(Invoice).options(_invoice_contract())
    if contract_id is not None:
        q = q.where(Invoice.contract_id == contract_id)
    if status:
        q = q.where(Invoice.status == status)
    q = q.order_by(desc(Invoice.created_at), desc(Invoice.id)).limit(limit)
    return list(db.scalars(q).all())


# -------------------- Maintenance --------------------

def maintenance_with_relations(db: Session, request_id: int) -> MaintenanceRequest:
    stmt = (
        select(MaintenanceRequest)
        .where(MaintenanceRequest.id == request_id)
        .options(selectinload(MaintenanceRequest.property), selectinload(MaintenanceRequest.tenant))
    )
    return _one(db, stmt, "Maintenance request")


def list_maintenance(
    db: Session,
    *,
    property_id: Optional[int] = None,
    status: Optional[str] = None,
    limit: int = 200,
) -> list[MaintenanceRequest]:
    q = select(MaintenanceRequest).options(
        selectinload(MaintenanceRequest.property), selectinload(MaintenanceRequest.tenant)
    )
    if property_id is not None:
        q = q.where(MaintenanceRequest.property_id == property_id)
    if status:
        q = q.where(MaintenanceRequest.status == status)
    q = q.order_by(desc(MaintenanceRequest.created_at), desc(MaintenanceRequest.id)).limit(limit)
    return list(db.scalars(q).all())


# -------------------- Payments --------------------

def _payment_invoice():
    return selectinload(Payment.invoice).options(_invoice_contract())


def payment_with_relations(db: Session, payment_id: int) -> Payment:
    stmt = select(Payment).where(Payment.id == payment_id).options(_payment_invoice())
    return _one(db, stmt, "Payment")


def list_payments(
    db: Session,
    *,
    invoice_id: Optional[int] = None,
    status: Optional[str] = None,
    limit: int = 200,
) -> list[Payment]:
    q = select(Payment).options(_payment_invoice())
    if invoice_id is not None:
        q = q.where(Payment.invoice_id == invoice_id)
    if status:
        q = q.where(Payment.status == status)
    q = q.order_by(desc(Payment.created_at), desc(Payment.id)).limit(limit)
    return list(db.scalars(q).all())
