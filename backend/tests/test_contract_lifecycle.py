from __future__ import annotations

from conftest import mk_contract, mk_property, mk_tenant


def test_creating_contract_marks_property_rented(admin_client):
    prop = mk_property(admin_client)
    assert prop["status"] == "available"
    tenant = mk_tenant(admin_client)

    contract = mk_contract(admin_client, prop["id"], tenant["id"])
    assert contract["status"] == "active"

    r = admin_client.get(f"/api/properties/{prop['id']}")
    assert r.status_code == 200
    assert r.json()["status"] == "rented"


def test_deleting_contract_marks_property_available(admin_client):
    prop = mk_property(admin_client)
    tenant = mk_tenant(admin_client)
    contract = mk_contract(admin_client, prop["id"], tenant["id"])

    r = admin_client.delete(f"/api/contracts/{contract['id']}")
    assert r.status_code == 204

    assert admin_client.get(f"/api/contracts/{contract['id']}").status_code == 404
    assert admin_client.get(f"/api/properties/{prop['id']}").json()["status"] == "available"


def test_deleting_missing_contract_leaves_properties_alone(admin_client):
    prop = mk_property(admin_client, status="maintenance")

    r = admin_client.delete("/api/contracts/9999")
    assert r.status_code == 204
    assert admin_client.get(f"/api/properties/{prop['id']}").json()["status"] == "maintenance"


def test_contract_with_unknown_property_is_rejected_without_side_effects(admin_client):
    tenant = mk_tenant(admin_client)

    r = admin_client.post(
        "/api/contracts",
        json={
            "property_id": 4242,
            "tenant_id": tenant["id"],
            "start_date": "2026-01-01T00:00:00",
            "end_date": "2026-12-31T00:00:00",
            "monthly_rent": 900.0,
        },
    )
    assert r.status_code == 400
    assert admin_client.get("/api/contracts").json() == []


def test_contract_end_before_start_is_rejected(admin_client):
    prop = mk_property(admin_client)
    tenant = mk_tenant(admin_client)

    r = admin_client.post(
        "/api/contracts",
        json={
            "property_id": prop["id"],
            "tenant_id": tenant["id"],
            "start_date": "2026-06-01T00:00:00",
            "end_date": "2026-01-01T00:00:00",
            "monthly_rent": 900.0,
        },
    )
    assert r.status_code == 400
    assert admin_client.get(f"/api/properties/{prop['id']}").json()["status"] == "available"


def test_updating_contract_does_not_touch_property_status(admin_client):
    prop = mk_property(admin_client)
    tenant = mk_tenant(admin_client)
    contract = mk_contract(admin_client, prop["id"], tenant["id"])

    r = admin_client.put(f"/api/contracts/{contract['id']}", json={"status": "terminated"})
    assert r.status_code == 200
    assert r.json()["status"] == "terminated"
    assert admin_client.get(f"/api/properties/{prop['id']}").json()["status"] == "rented"


def test_property_with_contracts_cannot_be_deleted(admin_client):
    prop = mk_property(admin_client)
    tenant = mk_tenant(admin_client)
    mk_contract(admin_client, prop["id"], tenant["id"])

    r = admin_client.delete(f"/api/properties/{prop['id']}")
    assert r.status_code == 400
    assert admin_client.get(f"/api/properties/{prop['id']}").status_code == 200


def test_offset_dates_are_stored_as_utc(admin_client):
    prop = mk_property(admin_client)
    tenant = mk_tenant(admin_client)

    contract = mk_contract(
        admin_client,
        prop["id"],
        tenant["id"],
        start_date="2026-01-01T00:00:00Z",
        end_date="2026-12-31T00:00:00",
    )
    assert contract["start_date"] == "2026-01-01T00:00:00"
    assert contract["end_date"] == "2026-12-31T00:00:00"


def test_offset_end_date_is_compared_in_utc(admin_client):
    prop = mk_property(admin_client)
    tenant = mk_tenant(admin_client)

    # 01:00 at +05:00 is 20:00 UTC on the previous day
    r = admin_client.post(
        "/api/contracts",
        json={
            "property_id": prop["id"],
            "tenant_id": tenant["id"],
            "start_date": "2026-01-01T00:00:00",
            "end_date": "2026-01-01T01:00:00+05:00",
            "monthly_rent": 900.0,
        },
    )
    assert r.status_code == 400


def test_update_cannot_move_end_before_start(admin_client):
    prop = mk_property(admin_client)
    tenant = mk_tenant(admin_client)
    contract = mk_contract(admin_client, prop["id"], tenant["id"])

    r = admin_client.put(f"/api/contracts/{contract['id']}", json={"end_date": "2025-06-01T00:00:00"})
    assert r.status_code == 400
    assert r.json()["detail"] == "end_date cannot be before start_date"

    r = admin_client.put(f"/api/contracts/{contract['id']}", json={"start_date": "2027-01-01T00:00:00"})
    assert r.status_code == 400

    r = admin_client.put(
        f"/api/contracts/{contract['id']}",
        json={"start_date": "2027-01-01T00:00:00", "end_date": "2027-12-31T00:00:00"},
    )
    assert r.status_code == 200
    assert r.json()["start_date"] == "2027-01-01T00:00:00"

    stored = admin_client.get(f"/api/contracts/{contract['id']}").json()
    assert stored["end_date"] == "2027-12-31T00:00:00"


def test_update_of_missing_contract_is_404(admin_client):
    r = admin_client.put("/api/contracts/4242", json={"status": "expired"})
    assert r.status_code == 404
    assert r.json()["detail"] == "Contract not found"
