# backend/propertymanager/models.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


def Money(precision: int = 10, scale: int = 2) -> Numeric:
    # money lives as NUMERIC in the database and as float in Python
    return Numeric(precision, scale, asdecimal=False)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )


# -----------------------------
# Users / sessions
# -----------------------------
class User(TimestampMixin, Base):
    __tablename__ = "users"
    __label__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(80), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    first_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")  # admin|manager|user
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    sessions: Mapped[List["UserSession"]] = relationship(back_populates="user", cascade="all, delete-orphan")


class UserSession(Base):
    __tablename__ = "user_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    token: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    user: Mapped["User"] = relationship(back_populates="sessions")


# -----------------------------
# Portfolio
# -----------------------------
class Property(TimestampMixin, Base):
    __tablename__ = "properties"
    __label__ = "property"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    property_type: Mapped[str] = mapped_column(String(20), nullable=False)  # apartment|house|commercial

    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[float] = mapped_column(Money(3, 1), nullable=False)
    monthly_rent: Mapped[float] = mapped_column(Money(), nullable=False)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="available", index=True)  # available|rented|maintenance
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    contracts: Mapped[List["Contract"]] = relationship(back_populates="property")
    maintenance_requests: Mapped[List["MaintenanceRequest"]] = relationship(back_populates="property")


class Tenant(TimestampMixin, Base):
    __tablename__ = "tenants"
    __label__ = "tenant"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    phone: Mapped[str] = mapped_column(String(40), nullable=False)

    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    date_of_birth: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    emergency_contact: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    contracts: Mapped[List["Contract"]] = relationship(back_populates="tenant")
    maintenance_requests: Mapped[List["MaintenanceRequest"]] = relationship(back_populates="tenant")


class Contract(TimestampMixin, Base):
    __tablename__ = "contracts"
    __label__ = "contract"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    property_id: Mapped[int] = mapped_column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    tenant_id: Mapped[int] = mapped_column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)

    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    monthly_rent: Mapped[float] = mapped_column(Money(), nullable=False)
    security_deposit: Mapped[Optional[float]] = mapped_column(Money(), nullable=True)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active", index=True)  # active|expired|terminated
    terms: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    property: Mapped["Property"] = relationship(back_populates="contracts")
    tenant: Mapped["Tenant"] = relationship(back_populates="contracts")
    invoices: Mapped[List["Invoice"]] = relationship(back_populates="contract")


class Invoice(TimestampMixin, Base):
    __tablename__ = "invoices"
    __label__ = "invoice"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    invoice_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)

    contract_id: Mapped[int] = mapped_column(Integer, ForeignKey("contracts.id"), nullable=False, index=True)

    amount: Mapped[float] = mapped_column(Money(), nullable=False)
    due_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    issue_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)  # pending|paid|overdue
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    contract: Mapped["Contract"] = relationship(back_populates="invoices")
    payments: Mapped[List["Payment"]] = relationship(back_populates="invoice")


class MaintenanceRequest(TimestampMixin, Base):
    __tablename__ = "maintenance_requests"
    __label__ = "maintenance request"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    property_id: Mapped[int] = mapped_column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    tenant_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("tenants.id"), nullable=True, index=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")  # low|medium|high|urgent
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)  # pending|in_progress|completed|cancelled

    estimated_cost: Mapped[Optional[float]] = mapped_column(Money(), nullable=True)
    actual_cost: Mapped[Optional[float]] = mapped_column(Money(), nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    property: Mapped["Property"] = relationship(back_populates="maintenance_requests")
    tenant: Mapped[Optional["Tenant"]] = relationship(back_populates="maintenance_requests")


class Payment(TimestampMixin, Base):
    __tablename__ = "payments"
    __label__ = "payment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    invoice_id: Mapped[int] = mapped_column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)

    amount: Mapped[float] = mapped_column(Money(), nullable=False)
    payment_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)  # bank_transfer|check|cash|online

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)  # pending|completed|failed
    reference: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    invoice: Mapped["Invoice"] = relationship(back_populates="payments")
