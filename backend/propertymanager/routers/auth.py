# backend/propertymanager/routers/auth.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response
from sqlalchemy.orm import Session

from ..auth import (
    Principal,
    clear_session_cookie,
    get_principal,
    get_session_store,
    session_token_from_request,
    set_session_cookie,
)
from ..db import get_db
from ..models import User
from ..schemas import LoginIn, MessageOut, UserEnvelope, UserOut
from ..services.auth_service import authenticate
from ..services.session_store import SessionStore

log = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=UserEnvelope)
def login(
    payload: LoginIn,
    response: Response,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    user = authenticate(db, username=payload.username, password=payload.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    sess = store.create(int(user.id))
    set_session_cookie(response, sess.token, sess.expires_at)

    log.info("login", extra={"user_id": int(user.id)})
    return UserEnvelope(user=UserOut.model_validate(user))


@router.post("/logout", response_model=MessageOut)
def logout(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
):
    token = session_token_from_request(request, authorization)
    if token:
        store.revoke(token)
    clear_session_cookie(response)
    return MessageOut(message="Logged out successfully")


@router.get("/me", response_model=UserEnvelope)
def me(db: Session = Depends(get_db), p: Principal = Depends(get_principal)):
    user = db.get(User, p.user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserEnvelope(user=UserOut.model_validate(user))
