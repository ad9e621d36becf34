"""
Application configuration.
All settings are loaded from environment variables (or .env).
Every field has a permissive default: the service boots without Stripe
credentials and runs in demo-only (degraded) mode.
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # ===========================================
    # APPLICATION
    # ===========================================
    # Comma-separated. Empty = allow any origin.
    cors_origins: str = ""
    host: str = "0.0.0.0"
    port: int = 4242
    # Storefront page and assets. Mounted at / only if the directory exists.
    static_dir: str | None = "public"

    # ===========================================
    # STRIPE
    # ===========================================
    stripe_secret: str = ""
    stripe_price_id: str = ""
    stripe_webhook_secret: str = ""
    success_url: str = "http://localhost:4242?session_id={CHECKOUT_SESSION_ID}"
    cancel_url: str = "http://localhost:4242?canceled=true"

    # ===========================================
    # GRANTS
    # ===========================================
    # Check ?file= against the grant's resource set. Off: any index is served.
    enforce_resource_set: bool = False
    # Drop expired grants from the store on every issue.
    purge_expired_on_issue: bool = False

    # ===========================================
    # LOGGING
    # ===========================================
    request_id_header: str = "X-Request-Id"
    log_file: str | None = None
    log_max_bytes: int = 10_000_000
    log_backup_count: int = 5

    @field_validator("stripe_secret", "stripe_price_id", "stripe_webhook_secret")
    @classmethod
    def strip_credentials(cls, v: str) -> str:
        """Whitespace-only credentials count as unset."""
        return v.strip()

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret)

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
