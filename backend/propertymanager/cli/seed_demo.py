# backend/propertymanager/cli/seed_demo.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from propertymanager.db import SessionLocal
from propertymanager.models import Contract, Invoice, MaintenanceRequest, Property, Tenant
from propertymanager.schemas import ContractCreate, PaymentCreate
from propertymanager.services.lifecycle import create_contract, create_payment


@dataclass(frozen=True)
class SeedResult:
    property_ids: list[int]
    tenant_ids: list[int]
    contract_id: Optional[int]
    invoice_id: Optional[int]


DEMO_PROPERTIES = [
    {
        "name": "Maple Court 2B",
        "address": "12 Maple Court, Springfield",
        "property_type": "apartment",
        "bedrooms": 2,
        "bathrooms": 1.0,
        "monthly_rent": 1200.0,
        "description": "Second floor unit with balcony",
    },
    {
        "name": "Oak Street House",
        "address": "48 Oak Street, Springfield",
        "property_type": "house",
        "bedrooms": 3,
        "bathrooms": 2.5,
        "monthly_rent": 2100.0,
    },
    {
        "name": "Riverside Retail",
        "address": "5 River Road, Springfield",
        "property_type": "commercial",
        "bedrooms": 0,
        "bathrooms": 1.0,
        "monthly_rent": 3500.0,
    },
]

DEMO_TENANTS = [
    {"first_name": "Jane", "last_name": "Doe", "email": "jane.doe@demo.local", "phone": "555-0101"},
    {"first_name": "Sam", "last_name": "Rivera", "email": "sam.rivera@demo.local", "phone": "555-0102"},
]


def _get_or_create_property(db: Session, data: dict) -> Property:
    row = db.scalar(select(Property).where(Property.name == data["name"]))
    if row:
        return row
    row = Property(**data)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def _get_or_create_tenant(db: Session, data: dict) -> Tenant:
    row = db.scalar(select(Tenant).where(Tenant.email == data["email"]))
    if row:
        return row
    row = Tenant(**data)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def seed_demo(*, with_activity: bool = True) -> SeedResult:
    """
    Idempotent demo data: a few properties and tenants, and (optionally) one
    leased unit with a paid invoice and an open maintenance request so the
    dashboard has something to show.
    """
    db = SessionLocal()
    try:
        props = [_get_or_create_property(db, d) for d in DEMO_PROPERTIES]
        tenants = [_get_or_create_tenant(db, d) for d in DEMO_TENANTS]

        contract_id: Optional[int] = None
        invoice_id: Optional[int] = None

        if with_activity:
            unit, tenant = props[0], tenants[0]
            contract = db.scalar(
                select(Contract).where(Contract.property_id == unit.id, Contract.tenant_id == tenant.id)
            )
            if contract is None:
                now = datetime.utcnow()
                contract = create_contract(
                    db,
                    ContractCreate(
                        property_id=unit.id,
                        tenant_id=tenant.id,
                        start_date=now,
                        end_date=now + timedelta(days=365),
                        monthly_rent=float(unit.monthly_rent),
                        security_deposit=float(unit.monthly_rent),
                    ),
                )
            contract_id = int(contract.id)

            number = f"DEMO-{contract_id:04d}-001"
            invoice = db.scalar(select(Invoice).where(Invoice.invoice_number == number))
            if invoice is None:
                now = datetime.utcnow()
                invoice = Invoice(
                    invoice_number=number,
                    contract_id=contract_id,
                    amount=float(contract.monthly_rent),
                    issue_date=now,
                    due_date=now + timedelta(days=14),
                    description="First month's rent",
                )
                db.add(invoice)
                db.commit()
                db.refresh(invoice)

                create_payment(
                    db,
                    PaymentCreate(
                        invoice_id=invoice.id,
                        amount=float(invoice.amount),
                        payment_date=now,
                        payment_method="bank_transfer",
                        status="completed",
                        reference=number,
                    ),
                )
            invoice_id = int(invoice.id)

            has_request = db.scalar(
                select(MaintenanceRequest).where(MaintenanceRequest.property_id == props[1].id)
            )
            if has_request is None:
                db.add(
                    MaintenanceRequest(
                        property_id=props[1].id,
                        title="Leaking kitchen tap",
                        description="Tap drips constantly, washer likely worn",
                        priority="low",
                        estimated_cost=80.0,
                    )
                )
                db.commit()

        return SeedResult(
            property_ids=[int(p.id) for p in props],
            tenant_ids=[int(t.id) for t in tenants],
            contract_id=contract_id,
            invoice_id=invoice_id,
        )
    finally:
        db.close()
