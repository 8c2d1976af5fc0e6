# backend/propertymanager/cli/__main__.py
from __future__ import annotations

import argparse
import getpass

from propertymanager.config import settings
from propertymanager.db import SessionLocal, init_db
from propertymanager.logging_config import configure_logging
from propertymanager.services.auth_service import ensure_admin_user
from propertymanager.services.session_store import SessionStore
from propertymanager.cli.seed_demo import seed_demo


def _create_admin(args: argparse.Namespace) -> dict:
    password = args.password or getpass.getpass("Admin password: ")
    db = SessionLocal()
    try:
        user, created = ensure_admin_user(
            db,
            username=args.username,
            password=password,
            email=args.email,
        )
        return {"ok": True, "user_id": int(user.id), "username": user.username, "created": created}
    finally:
        db.close()


def _seed_demo(args: argparse.Namespace) -> dict:
    out = seed_demo(with_activity=(not args.no_activity))
    return {
        "ok": True,
        "property_ids": out.property_ids,
        "tenant_ids": out.tenant_ids,
        "contract_id": out.contract_id,
        "invoice_id": out.invoice_id,
    }


def _purge_sessions(args: argparse.Namespace) -> dict:
    db = SessionLocal()
    try:
        removed = SessionStore(db, ttl_minutes=settings.session_ttl_minutes).purge_expired()
        return {"ok": True, "purged": removed}
    finally:
        db.close()


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="propertymanager")
    p.add_argument("--create-tables", action="store_true", help="run create_all before the command")
    sub = p.add_subparsers(dest="command", required=True)

    ca = sub.add_parser("create-admin", help="create an admin account if the username is free")
    ca.add_argument("--username", default=settings.bootstrap_admin_username)
    ca.add_argument("--email", default=settings.bootstrap_admin_email)
    ca.add_argument("--password", default=None)
    ca.set_defaults(func=_create_admin)

    sd = sub.add_parser("seed-demo", help="insert demo properties, tenants and activity")
    sd.add_argument("--no-activity", action="store_true")
    sd.set_defaults(func=_seed_demo)

    ps = sub.add_parser("purge-sessions", help="delete expired login sessions")
    ps.set_defaults(func=_purge_sessions)

    args = p.parse_args(argv)

    configure_logging()
    if args.create_tables or settings.auto_create_tables:
        init_db()

    print(args.func(args))


if __name__ == "__main__":
    main()
