# backend/propertymanager/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .db import SessionLocal, init_db
from .logging_config import configure_logging

from .middleware.request_id import RequestIDMiddleware
from .middleware.structured_logging import StructuredLoggingMiddleware

from .routers.health import router as health_router
from .routers.auth import router as auth_router
from .routers.admin_users import router as admin_users_router
from .routers.dashboard import router as dashboard_router

from .routers.properties import router as properties_router
from .routers.tenants import router as tenants_router
from .routers.contracts import router as contracts_router
from .routers.invoices import router as invoices_router
from .routers.maintenance import router as maintenance_router
from .routers.payments import router as payments_router

from .services.auth_service import ensure_admin_user

API_PREFIX = "/api"

log = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    val = getattr(settings, "cors_allow_origins", ["*"])
    if isinstance(val, str):
        v = val.strip()
        return ["*"] if v == "*" else [x.strip() for x in v.split(",") if x.strip()]
    if isinstance(val, list) and val:
        return val
    return ["*"]


def bootstrap_admin() -> None:
    if not settings.bootstrap_admin:
        return
    db = SessionLocal()
    try:
        ensure_admin_user(
            db,
            username=settings.bootstrap_admin_username,
            password=settings.bootstrap_admin_password,
            email=settings.bootstrap_admin_email,
        )
    finally:
        db.close()


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled error", extra={"method": request.method, "path": request.url.path})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        init_db()
    bootstrap_admin()
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Property Manager", version=settings.app_version, lifespan=lifespan)

    # Request-ID wraps logging so every request line carries the id
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unhandled_error)

    # Core
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(admin_users_router, prefix=API_PREFIX)
    app.include_router(dashboard_router, prefix=API_PREFIX)

    # Records
    app.include_router(properties_router, prefix=API_PREFIX)
    app.include_router(tenants_router, prefix=API_PREFIX)
    app.include_router(contracts_router, prefix=API_PREFIX)
    app.include_router(invoices_router, prefix=API_PREFIX)
    app.include_router(maintenance_router, prefix=API_PREFIX)
    app.include_router(payments_router, prefix=API_PREFIX)

    return app


app = create_app()
