# backend/propertymanager/routers/admin_users.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from ..auth import Principal, get_session_store, require_admin
from ..db import get_db
from ..models import User
from ..schemas import UserCreate, UserOut, UserUpdate
from ..services.auth_service import create_user, update_user
from ..services.records import delete_row, list_rows, must_get
from ..services.session_store import SessionStore

router = APIRouter(prefix="/admin/users", tags=["admin"])


@router.get("", response_model=list[UserOut])
def list_users(
    limit: int = Query(default=500, ge=1, le=2000),
    db: Session = Depends(get_db),
    p: Principal = Depends(require_admin),
):
    return list_rows(db, User, limit=limit)


@router.post("", response_model=UserOut, status_code=201)
def post_user(payload: UserCreate, db: Session = Depends(get_db), p: Principal = Depends(require_admin)):
    return create_user(db, payload)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db), p: Principal = Depends(require_admin)):
    return must_get(db, User, user_id, label="User")


@router.put("/{user_id}", response_model=UserOut)
def put_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
    p: Principal = Depends(require_admin),
):
    user = update_user(db, user_id, payload)
    if payload.is_active is False:
        store.revoke_user(user_id)
    return user


@router.delete("/{user_id}", status_code=204)
def remove_user(user_id: int, db: Session = Depends(get_db), p: Principal = Depends(require_admin)):
    if int(user_id) == int(p.user_id):
        raise HTTPException(status_code=400, detail="Cannot delete the account you are signed in with")
    delete_row(db, User, user_id)
    return Response(status_code=204)
