# backend/propertymanager/services/auth_service.py
from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import secrets
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config import settings
from ..models import User
from ..schemas import UserCreate, UserUpdate
from .records import apply_changes, commit_or_400, must_get

log = logging.getLogger(__name__)

DUPLICATE_USER = "Username or email already exists"


def hash_password(password: str, *, iterations: Optional[int] = None) -> str:
    salt = secrets.token_bytes(16)
    iters = int(iterations or settings.password_hash_iterations)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iters)
    return f"pbkdf2_sha256${iters}${base64.b64encode(salt).decode()}${base64.b64encode(dk).decode()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        algo, iters_s, salt_b64, dk_b64 = stored.split("$", 3)
        if algo != "pbkdf2_sha256":
            return False
        iters = int(iters_s)
        salt = base64.b64decode(salt_b64.encode())
        dk = base64.b64decode(dk_b64.encode())
    except (ValueError, TypeError):
        return False
    test = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iters)
    return hmac.compare_digest(test, dk)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.scalar(select(User).where(User.username == username.strip()))


def authenticate(db: Session, *, username: str, password: str) -> Optional[User]:
    """None for unknown user, bad password, or a deactivated account."""
    user = get_user_by_username(db, username)
    if user is None or not user.password_hash:
        return None
    if not verify_password(password, str(user.password_hash)):
        return None
    if not user.is_active:
        return None
    return user


def create_user(db: Session, payload: UserCreate) -> User:
    data = payload.model_dump()
    password = data.pop("password")
    data["username"] = data["username"].strip()
    data["email"] = data["email"].strip().lower()

    user = User(**data, password_hash=hash_password(password))
    db.add(user)
    commit_or_400(db, detail=DUPLICATE_USER)
    db.refresh(user)
    return user


def update_user(db: Session, user_id: int, payload: UserUpdate) -> User:
    user = must_get(db, User, user_id)
    changes = payload.model_dump(exclude_unset=True)

    password = changes.pop("password", None)
    if password:
        changes["password_hash"] = hash_password(password)
    if changes.get("username"):
        changes["username"] = changes["username"].strip()
    if changes.get("email"):
        changes["email"] = changes["email"].strip().lower()

    apply_changes(user, changes)
    db.add(user)
    commit_or_400(db, detail=DUPLICATE_USER)
    db.refresh(user)
    return user


def ensure_admin_user(
    db: Session,
    *,
    username: str,
    password: str,
    email: str,
    first_name: str = "Admin",
    last_name: str = "User",
) -> tuple[User, bool]:
    """Create the admin account if that username is free. Returns (user, created)."""
    existing = get_user_by_username(db, username)
    if existing is not None:
        return existing, False

    user = create_user(
        db,
        UserCreate(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            role="admin",
        ),
    )
    log.info("bootstrap admin created", extra={"user_id": user.id})
    return user, True
