from __future__ import annotations

from conftest import mk_contract, mk_invoice, mk_payment, mk_property, mk_tenant


def _world(client):
    prop = mk_property(client)
    tenant = mk_tenant(client)
    contract = mk_contract(client, prop["id"], tenant["id"])
    inv = mk_invoice(client, contract["id"])
    pay = mk_payment(client, inv["id"], 1200.0)
    r = client.post(
        "/api/maintenance",
        json={
            "property_id": prop["id"],
            "tenant_id": tenant["id"],
            "title": "Broken heater",
            "description": "No heat in bedroom",
            "priority": "high",
        },
    )
    assert r.status_code == 201, r.text
    return prop, tenant, contract, inv, pay, r.json()


def test_property_detail_embeds_contracts_and_requests(admin_client):
    prop, tenant, contract, _, _, req = _world(admin_client)

    body = admin_client.get(f"/api/properties/{prop['id']}").json()
    assert [c["id"] for c in body["contracts"]] == [contract["id"]]
    assert body["contracts"][0]["tenant"]["email"] == tenant["email"]
    assert [m["id"] for m in body["maintenance_requests"]] == [req["id"]]
    assert body["maintenance_requests"][0]["tenant"]["id"] == tenant["id"]


def test_contract_list_and_detail(admin_client):
    prop, tenant, contract, inv, _, _ = _world(admin_client)

    items = admin_client.get("/api/contracts").json()
    assert len(items) == 1
    assert items[0]["property"]["id"] == prop["id"]
    assert items[0]["tenant"]["id"] == tenant["id"]
    assert "invoices" not in items[0]

    detail = admin_client.get(f"/api/contracts/{contract['id']}").json()
    assert [i["invoice_number"] for i in detail["invoices"]] == [inv["invoice_number"]]


def test_invoice_and_payment_expansion(admin_client):
    prop, tenant, contract, inv, pay, _ = _world(admin_client)

    listed = admin_client.get("/api/invoices").json()
    assert listed[0]["contract"]["property"]["id"] == prop["id"]
    assert listed[0]["contract"]["tenant"]["id"] == tenant["id"]

    detail = admin_client.get(f"/api/invoices/{inv['id']}").json()
    assert detail["status"] == "paid"
    assert [p["id"] for p in detail["payments"]] == [pay["id"]]

    p = admin_client.get(f"/api/payments/{pay['id']}").json()
    assert p["invoice"]["id"] == inv["id"]
    assert p["invoice"]["contract"]["id"] == contract["id"]
    assert p["invoice"]["contract"]["tenant"]["last_name"] == tenant["last_name"]


def test_maintenance_expansion_allows_missing_tenant(admin_client):
    prop = mk_property(admin_client)
    r = admin_client.post(
        "/api/maintenance",
        json={"property_id": prop["id"], "title": "Roof", "description": "Missing shingles"},
    )
    assert r.status_code == 201
    req = r.json()
    assert req["priority"] == "medium"
    assert req["status"] == "pending"

    detail = admin_client.get(f"/api/maintenance/{req['id']}").json()
    assert detail["property"]["id"] == prop["id"]
    assert detail["tenant"] is None


def test_list_filters(admin_client):
    prop, tenant, contract, _, _, _ = _world(admin_client)
    other = mk_property(admin_client, name="Other")

    assert len(admin_client.get(f"/api/contracts?property_id={prop['id']}").json()) == 1
    assert admin_client.get(f"/api/contracts?property_id={other['id']}").json() == []
    assert len(admin_client.get("/api/invoices?status=paid").json()) == 1
    assert admin_client.get("/api/invoices?status=pending").json() == []
    assert len(admin_client.get(f"/api/maintenance?property_id={prop['id']}").json()) == 1
    assert [p["name"] for p in admin_client.get("/api/properties?status=available").json()] == ["Other"]


def test_missing_detail_rows_are_404(admin_client):
    for path, label in (
        ("/api/properties/999", "Property"),
        ("/api/contracts/999", "Contract"),
        ("/api/invoices/999", "Invoice"),
        ("/api/maintenance/999", "Maintenance request"),
        ("/api/payments/999", "Payment"),
        ("/api/tenants/999", "Tenant"),
    ):
        r = admin_client.get(path)
        assert r.status_code == 404, path
        assert r.json()["detail"] == f"{label} not found"
