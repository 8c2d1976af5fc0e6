# backend/propertymanager/services/session_store.py
from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..models import UserSession


class SessionStore:
    """
    Server-side sessions: opaque token -> user id, with an expiry.

    Request handling receives a store through the get_session_store
    dependency, so tests (or another backend) can swap it out with
    app.dependency_overrides.
    """

    def __init__(self, db: Session, *, ttl_minutes: int):
        self.db = db
        self.ttl = timedelta(minutes=int(ttl_minutes))

    def _now(self) -> datetime:
        return datetime.utcnow()

    def create(self, user_id: int) -> UserSession:
        now = self._now()
        row = UserSession(
            token=secrets.token_urlsafe(32),
            user_id=int(user_id),
            created_at=now,
            expires_at=now + self.ttl,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def resolve(self, token: str) -> Optional[int]:
        if not token:
            return None
        row = self.db.scalar(select(UserSession).where(UserSession.token == token))
        if row is None:
            return None
        if row.expires_at <= self._now():
            self.db.delete(row)
            self.db.commit()
            return None
        return int(row.user_id)

    def revoke(self, token: str) -> bool:
        res = self.db.execute(delete(UserSession).where(UserSession.token == token))
        self.db.commit()
        return bool(res.rowcount)

    def revoke_user(self, user_id: int) -> int:
        res = self.db.execute(delete(UserSession).where(UserSession.user_id == int(user_id)))
        self.db.commit()
        return int(res.rowcount or 0)

    def purge_expired(self) -> int:
        res = self.db.execute(delete(UserSession).where(UserSession.expires_at <= self._now()))
        self.db.commit()
        return int(res.rowcount or 0)
