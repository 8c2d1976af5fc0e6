from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import USER_PASSWORD, _mk_user, login
from propertymanager.models import UserSession


def test_non_admin_gets_403(user_client):
    r = user_client.get("/api/admin/users")
    assert r.status_code == 403
    assert r.json()["detail"] == "Admin access required"


def test_anonymous_gets_401(client):
    assert client.get("/api/admin/users").status_code == 401


def test_admin_creates_and_lists_users(admin_client):
    r = admin_client.post(
        "/api/admin/users",
        json={
            "username": "  newbie ",
            "email": "NewBie@Example.com",
            "password": "s3cret",
            "first_name": "New",
            "last_name": "Bie",
            "role": "manager",
        },
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["username"] == "newbie"
    assert body["email"] == "newbie@example.com"
    assert body["role"] == "manager"
    assert "password_hash" not in body

    names = [u["username"] for u in admin_client.get("/api/admin/users").json()]
    assert set(names) == {"admin", "newbie"}


def test_duplicate_username_or_email_is_400(admin_client):
    _mk_user("dupe", USER_PASSWORD, "user")

    r = admin_client.post(
        "/api/admin/users",
        json={"username": "dupe", "email": "other@test.local", "password": "x"},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Username or email already exists"

    r = admin_client.post(
        "/api/admin/users",
        json={"username": "other", "email": "DUPE@test.local", "password": "x"},
    )
    assert r.status_code == 400


def test_password_change_takes_effect(admin_client, client):
    uid = _mk_user("rotate", USER_PASSWORD, "user")

    r = admin_client.put(f"/api/admin/users/{uid}", json={"password": "fresh-pass"})
    assert r.status_code == 200

    other = TestClient(client.app)
    assert other.post("/api/auth/login", json={"username": "rotate", "password": USER_PASSWORD}).status_code == 401
    login(other, "rotate", "fresh-pass")


def test_unknown_user_is_404(admin_client):
    assert admin_client.get("/api/admin/users/999").status_code == 404
    assert admin_client.put("/api/admin/users/999", json={"first_name": "X"}).status_code == 404


def test_deleting_user_drops_their_sessions(admin_client, db):
    uid = _mk_user("leaver", USER_PASSWORD, "user")

    theirs = TestClient(admin_client.app)
    login(theirs, "leaver", USER_PASSWORD)
    assert db.query(UserSession).filter(UserSession.user_id == uid).count() == 1

    assert admin_client.delete(f"/api/admin/users/{uid}").status_code == 204
    assert db.query(UserSession).filter(UserSession.user_id == uid).count() == 0
    assert theirs.get("/api/auth/me").status_code == 401

    assert admin_client.delete(f"/api/admin/users/{uid}").status_code == 204


def test_admin_cannot_delete_self(admin_client):
    me = admin_client.get("/api/auth/me").json()["user"]
    assert admin_client.delete(f"/api/admin/users/{me['id']}").status_code == 400


def test_deactivating_user_revokes_sessions(admin_client, db):
    uid = _mk_user("paused", USER_PASSWORD, "user")
    theirs = TestClient(admin_client.app)
    login(theirs, "paused", USER_PASSWORD)

    r = admin_client.put(f"/api/admin/users/{uid}", json={"is_active": False})
    assert r.status_code == 200
    assert r.json()["is_active"] is False
    assert db.query(UserSession).filter(UserSession.user_id == uid).count() == 0
    assert theirs.get("/api/auth/me").status_code == 401
