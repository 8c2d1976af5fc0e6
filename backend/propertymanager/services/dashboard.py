# backend/propertymanager/services/dashboard.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import Contract, MaintenanceRequest, Payment, Property, Tenant


@dataclass(frozen=True)
class DashboardStats:
    total_properties: int
    active_tenants: int
    active_contracts: int
    pending_maintenance: int
    monthly_revenue: float


def _today_utc_date() -> date:
    return datetime.utcnow().date()


def month_window(today: date) -> tuple[datetime, datetime]:
    """
    [first day 00:00, first day of next month 00:00).

    Half-open on the right so every moment of the last day counts.
    """
    start = datetime(today.year, today.month, 1)
    if today.month == 12:
        end = datetime(today.year + 1, 1, 1)
    else:
        end = datetime(today.year, today.month + 1, 1)
    return start, end


def _count(db: Session, stmt) -> int:
    return int(db.scalar(stmt) or 0)


def monthly_revenue(db: Session, *, today: Optional[date] = None) -> float:
    start, end = month_window(today or _today_utc_date())
    s = db.scalar(
        select(func.coalesce(func.sum(Payment.amount), 0.0))
        .where(Payment.payment_date >= start, Payment.payment_date < end)
        .where(Payment.status == "completed")
    )
    return float(s or 0.0)


def dashboard_stats(db: Session, *, today: Optional[date] = None) -> DashboardStats:
    # each figure is its own statement; the card view does not need one snapshot
    return DashboardStats(
        total_properties=_count(db, select(func.count(Property.id))),
        active_tenants=_count(db, select(func.count(Tenant.id)).where(Tenant.is_active.is_(True))),
        active_contracts=_count(db, select(func.count(Contract.id)).where(Contract.status == "active")),
        pending_maintenance=_count(
            db, select(func.count(MaintenanceRequest.id)).where(MaintenanceRequest.status == "pending")
        ),
        monthly_revenue=monthly_revenue(db, today=today),
    )
