from __future__ import annotations

from datetime import date, datetime

from conftest import mk_contract, mk_invoice, mk_property, mk_tenant
from propertymanager.models import MaintenanceRequest, Payment
from propertymanager.services.dashboard import dashboard_stats, month_window, monthly_revenue


def test_month_window_is_half_open():
    assert month_window(date(2026, 10, 19)) == (datetime(2026, 10, 1), datetime(2026, 11, 1))
    assert month_window(date(2026, 12, 31)) == (datetime(2026, 12, 1), datetime(2027, 1, 1))
    assert month_window(date(2024, 2, 29)) == (datetime(2024, 2, 1), datetime(2024, 3, 1))


def test_empty_database_reports_zeroes(admin_client):
    r = admin_client.get("/api/dashboard/stats")
    assert r.status_code == 200
    assert r.json() == {
        "total_properties": 0,
        "active_tenants": 0,
        "active_contracts": 0,
        "pending_maintenance": 0,
        "monthly_revenue": 0.0,
    }


def test_dashboard_requires_login(client):
    assert client.get("/api/dashboard/stats").status_code == 401


def test_revenue_counts_only_completed_payments_inside_the_month(admin_client, db):
    prop = mk_property(admin_client)
    tenant = mk_tenant(admin_client)
    contract = mk_contract(admin_client, prop["id"], tenant["id"])
    inv = mk_invoice(admin_client, contract["id"], amount=5000.0)

    def pay(amount: float, when: datetime, status: str = "completed") -> None:
        db.add(
            Payment(
                invoice_id=inv["id"],
                amount=amount,
                payment_date=when,
                payment_method="online",
                status=status,
            )
        )

    pay(100.0, datetime(2026, 10, 1, 0, 0))          # first instant of the month
    pay(250.0, datetime(2026, 10, 31, 23, 30))       # late on the last day
    pay(999.0, datetime(2026, 9, 30, 23, 59))        # previous month
    pay(999.0, datetime(2026, 11, 1, 0, 0))          # next month
    pay(999.0, datetime(2026, 10, 10), "pending")
    pay(999.0, datetime(2026, 10, 11), "failed")
    db.commit()

    assert monthly_revenue(db, today=date(2026, 10, 19)) == 350.0


def test_counts_follow_status_filters(admin_client, db):
    p1 = mk_property(admin_client, name="A")
    mk_property(admin_client, name="B")
    active = mk_tenant(admin_client, email="a@test.local")
    mk_tenant(admin_client, email="b@test.local", is_active=False)

    mk_contract(admin_client, p1["id"], active["id"])
    mk_contract(admin_client, p1["id"], active["id"], status="expired")

    db.add(MaintenanceRequest(property_id=p1["id"], title="Leak", description="Kitchen tap"))
    db.add(MaintenanceRequest(property_id=p1["id"], title="Paint", description="Hallway", status="completed"))
    db.commit()

    stats = dashboard_stats(db, today=date(2026, 10, 19))
    assert stats.total_properties == 2
    assert stats.active_tenants == 1
    assert stats.active_contracts == 1
    assert stats.pending_maintenance == 1
    assert stats.monthly_revenue == 0.0


def test_offset_payment_dates_count_in_their_utc_month(admin_client, db):
    prop = mk_property(admin_client)
    tenant = mk_tenant(admin_client)
    contract = mk_contract(admin_client, prop["id"], tenant["id"])
    inv = mk_invoice(admin_client, contract["id"], amount=5000.0)

    # 22:00 on Oct 31 at -05:00 is 03:00 on Nov 1 UTC
    r = admin_client.post(
        "/api/payments",
        json={
            "invoice_id": inv["id"],
            "amount": 100.0,
            "payment_date": "2026-10-31T22:00:00-05:00",
            "payment_method": "online",
            "status": "completed",
        },
    )
    assert r.status_code == 201, r.text
    assert r.json()["payment_date"] == "2026-11-01T03:00:00"

    assert monthly_revenue(db, today=date(2026, 10, 15)) == 0.0
    assert monthly_revenue(db, today=date(2026, 11, 15)) == 100.0
