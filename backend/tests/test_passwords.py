from __future__ import annotations

import pytest

from propertymanager.config import Settings
from propertymanager.services.auth_service import ensure_admin_user, hash_password, verify_password


def test_hash_is_salted_and_verifiable():
    a = hash_password("hunter2", iterations=1000)
    b = hash_password("hunter2", iterations=1000)

    assert a != b
    assert a.startswith("pbkdf2_sha256$1000$")
    assert verify_password("hunter2", a)
    assert not verify_password("hunter3", a)


@pytest.mark.parametrize("stored", ["", "plaintext", "md5$1$a$b", "pbkdf2_sha256$x$y$z"])
def test_malformed_hashes_never_verify(stored):
    assert verify_password("anything", stored) is False


def test_ensure_admin_user_is_idempotent(db):
    u1, created1 = ensure_admin_user(db, username="root", password="pw", email="root@test.local")
    u2, created2 = ensure_admin_user(db, username="root", password="other", email="root@test.local")

    assert created1 is True
    assert created2 is False
    assert u1.id == u2.id
    assert u1.role == "admin"
    assert verify_password("pw", u2.password_hash)


def test_prod_refuses_default_secrets():
    with pytest.raises(ValueError):
        Settings(app_env="prod", cors_allow_origins=["https://app.example.com"], bootstrap_admin=False)

    with pytest.raises(ValueError):
        Settings(
            app_env="prod",
            session_secret="s" * 32,
            cors_allow_origins="*",
            bootstrap_admin=False,
        )

    ok = Settings(
        app_env="prod",
        session_secret="s" * 32,
        cors_allow_origins=["https://app.example.com"],
        bootstrap_admin=False,
    )
    assert ok.app_env == "prod"


def test_unknown_settlement_mode_is_rejected():
    with pytest.raises(ValueError):
        Settings(invoice_settlement_mode="sometimes")
