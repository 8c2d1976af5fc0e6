# backend/tests/conftest.py
from __future__ import annotations

import os
import tempfile

# settings are read at import time, so the environment goes first
_DB_DIR = tempfile.mkdtemp(prefix="propertymanager-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ["APP_ENV"] = "local"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["BOOTSTRAP_ADMIN"] = "false"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["INVOICE_SETTLEMENT_MODE"] = "single"

import pytest
from fastapi.testclient import TestClient

from propertymanager import models  # noqa: F401
from propertymanager.db import Base, SessionLocal, engine
from propertymanager.main import create_app
from propertymanager.schemas import UserCreate
from propertymanager.services.auth_service import create_user

ADMIN_PASSWORD = "admin-pass"
USER_PASSWORD = "user-pass"


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    return TestClient(create_app())


def _mk_user(username: str, password: str, role: str) -> int:
    s = SessionLocal()
    try:
        u = create_user(
            s,
            UserCreate(username=username, email=f"{username}@test.local", password=password, role=role),
        )
        return int(u.id)
    finally:
        s.close()


def login(client: TestClient, username: str, password: str):
    r = client.post("/api/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r


@pytest.fixture
def admin_client(client):
    _mk_user("admin", ADMIN_PASSWORD, "admin")
    login(client, "admin", ADMIN_PASSWORD)
    return client


@pytest.fixture
def user_client(client):
    _mk_user("clerk", USER_PASSWORD, "user")
    login(client, "clerk", USER_PASSWORD)
    return client


# -------------------- record builders (API level) --------------------

def mk_property(client: TestClient, **over) -> dict:
    body = {
        "name": "Unit 1",
        "address": "1 Main St",
        "property_type": "apartment",
        "bedrooms": 2,
        "bathrooms": 1.0,
        "monthly_rent": 1200.0,
    }
    body.update(over)
    r = client.post("/api/properties", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def mk_tenant(client: TestClient, email: str = "jane@test.local", **over) -> dict:
    body = {"first_name": "Jane", "last_name": "Doe", "email": email, "phone": "555-0100"}
    body.update(over)
    r = client.post("/api/tenants", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def mk_contract(client: TestClient, property_id: int, tenant_id: int, **over) -> dict:
    body = {
        "property_id": property_id,
        "tenant_id": tenant_id,
        "start_date": "2026-01-01T00:00:00",
        "end_date": "2026-12-31T00:00:00",
        "monthly_rent": 1200.0,
    }
    body.update(over)
    r = client.post("/api/contracts", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def mk_invoice(client: TestClient, contract_id: int, number: str = "INV-001", amount: float = 1200.0) -> dict:
    r = client.post(
        "/api/invoices",
        json={
            "invoice_number": number,
            "contract_id": contract_id,
            "amount": amount,
            "issue_date": "2026-10-01T00:00:00",
            "due_date": "2026-10-15T00:00:00",
        },
    )
    assert r.status_code == 201, r.text
    return r.json()


def mk_payment(client: TestClient, invoice_id: int, amount: float, **over) -> dict:
    body = {
        "invoice_id": invoice_id,
        "amount": amount,
        "payment_date": "2026-10-05T10:00:00",
        "payment_method": "bank_transfer",
        "status": "completed",
    }
    body.update(over)
    r = client.post("/api/payments", json=body)
    assert r.status_code == 201, r.text
    return r.json()
