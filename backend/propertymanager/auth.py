# backend/propertymanager/auth.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException, Request, Response
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .middleware.request_id import bind_user
from .models import User
from .services.session_store import SessionStore


@dataclass(frozen=True)
class Principal:
    user_id: int
    username: str
    email: str
    role: str  # admin | manager | user
    session_token: Optional[str] = None


ROLE_ORDER = {"user": 1, "manager": 2, "admin": 3}


def _require_role(principal: Principal, min_role: str, detail: str) -> None:
    if ROLE_ORDER.get(principal.role, 0) < ROLE_ORDER.get(min_role, 999):
        raise HTTPException(status_code=403, detail=detail)


def get_session_store(db: Session = Depends(get_db)) -> SessionStore:
    return SessionStore(db, ttl_minutes=settings.session_ttl_minutes)


# -------------------------
# Cookie token: a signed envelope around the session id
# -------------------------
def encode_session_cookie(session_token: str, expires_at: datetime) -> str:
    payload = {"sid": session_token, "exp": int(expires_at.replace(tzinfo=timezone.utc).timestamp())}
    return jwt.encode(payload, settings.session_secret, algorithm="HS256")


def decode_session_cookie(value: str) -> Optional[str]:
    """Session id from a cookie value, or None if tampered/expired/garbage."""
    try:
        claims = jwt.decode(value, settings.session_secret, algorithms=["HS256"])
    except jwt.PyJWTError:
        return None
    sid = claims.get("sid")
    return str(sid) if sid else None


def set_session_cookie(response: Response, session_token: str, expires_at: datetime) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        encode_session_cookie(session_token, expires_at),
        httponly=True,
        secure=bool(settings.session_cookie_secure),
        samesite=str(settings.session_cookie_samesite),
        max_age=int(settings.session_ttl_minutes) * 60,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.session_cookie_name, path="/")


def _raw_credential(request: Request, authorization: Optional[str]) -> Optional[str]:
    raw = request.cookies.get(settings.session_cookie_name)
    if not raw and authorization and str(authorization).lower().startswith("bearer "):
        raw = str(authorization).split(" ", 1)[1].strip()
    return raw or None


def session_token_from_request(request: Request, authorization: Optional[str] = None) -> Optional[str]:
    raw = _raw_credential(request, authorization)
    if not raw:
        return None
    return decode_session_cookie(raw)


# -------------------------
# get_principal
# -------------------------
def get_principal(
    request: Request,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> Principal:
    """
    Resolve the caller from the session cookie (or `Authorization: Bearer`
    carrying the same signed value). Anything short of a live session for an
    active user is a 401.
    """
    token = session_token_from_request(request, authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")

    user_id = store.resolve(token)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")

    user = db.get(User, user_id)
    if user is None or not user.is_active:
        raise HTTPException(status_code=401, detail="Authentication required")

    bind_user(request, int(user.id))
    return Principal(
        user_id=int(user.id),
        username=str(user.username),
        email=str(user.email),
        role=str(user.role),
        session_token=token,
    )


def require_admin(p: Principal = Depends(get_principal)) -> Principal:
    _require_role(p, "admin", "Admin access required")
    return p
