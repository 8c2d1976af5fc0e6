# backend/propertymanager/middleware/request_id.py
from __future__ import annotations

import re
import uuid
from contextvars import ContextVar
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# ids from upstream are echoed into logs and headers, so only plain tokens are trusted
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._\-]{1,128}$")

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    return request_id_ctx.get()


def incoming_request_id(request: Request) -> str:
    rid = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    return rid if _SAFE_REQUEST_ID.match(rid) else str(uuid.uuid4())


def bind_user(request: Request, user_id: int) -> None:
    """
    Record the authenticated caller on the request. Called from the auth
    dependency, which runs in a worker thread, so request.state is used
    rather than a ContextVar.
    """
    request.state.user_id = int(user_id)


def bound_user_id(request: Request) -> Optional[int]:
    return getattr(request.state, "user_id", None)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Per-request correlation context.

    The request id comes from X-Request-ID when it is a plain token, else a
    fresh uuid4. It is echoed on the response and exposed to the JSON log
    formatter. request.state also carries the caller's user id once
    authentication has run.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = incoming_request_id(request)

        request.state.request_id = rid
        request.state.user_id = None
        token = request_id_ctx.set(rid)
        try:
            resp = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        resp.headers[REQUEST_ID_HEADER] = rid
        return resp
