from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SESSION_SECRET = "property-manager-dev-secret"
DEFAULT_ADMIN_PASSWORD = "admin"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod
    app_version: str = "2026-10-19.v1"
    database_url: str = "sqlite:///./propertymanager.db"
    auto_create_tables: bool = True

    # ---- CORS (used by main.py) ----
    cors_allow_origins: list[str] | str = ["*"]

    # ---- Sessions ----
    session_secret: str = DEFAULT_SESSION_SECRET
    session_cookie_name: str = "propertymanager.sid"
    session_ttl_minutes: int = 60 * 24  # 24 hours
    session_cookie_secure: int = 0
    session_cookie_samesite: str = "lax"

    password_hash_iterations: int = 210_000

    # ---- Billing rules ----
    invoice_settlement_mode: str = "single"  # single|cumulative

    # ---- Bootstrap admin ----
    bootstrap_admin: bool = True
    bootstrap_admin_username: str = "admin"
    bootstrap_admin_password: str = DEFAULT_ADMIN_PASSWORD
    bootstrap_admin_email: str = "admin@propertymanager.com"

    def model_post_init(self, __context) -> None:
        mode = (self.invoice_settlement_mode or "single").strip().lower()
        if mode not in ("single", "cumulative"):
            raise ValueError(f"invoice_settlement_mode must be single|cumulative, got {mode!r}")
        object.__setattr__(self, "invoice_settlement_mode", mode)

        env = (self.app_env or "local").strip().lower()
        is_prod = env in ("prod", "production")

        if is_prod:
            if self.session_secret == DEFAULT_SESSION_SECRET:
                raise ValueError("SECURITY: session_secret must be set in prod")

            origins = self.cors_allow_origins
            if origins == "*" or origins == ["*"] or (isinstance(origins, str) and "*" in origins):
                raise ValueError("SECURITY: cors_allow_origins wildcard is not allowed in prod")

            if self.bootstrap_admin and self.bootstrap_admin_password == DEFAULT_ADMIN_PASSWORD:
                raise ValueError("SECURITY: default bootstrap admin password is not allowed in prod")


settings = Settings()
