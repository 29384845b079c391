"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) - single instance per process
    - tax_rate_percent is a percentage (18.0 means 18%), never a fraction

Design Decisions:
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://bizdesk:bizdesk@db:5432/bizdesk"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Billing
    tax_rate_percent: float = 18.0
    currency_symbol: str = "₪"
    # Printed instead of the symbol when no Unicode font can be found
    currency_code: str = "ILS"
    document_language: str = "he"
    # TTF with Hebrew/Arabic glyphs; unset means the first installed system TTF
    pdf_font_path: str | None = None

    @field_validator("document_language")
    @classmethod
    def check_language(cls, v: str) -> str:
        if v not in ("en", "he", "ar"):
            raise ValueError("document_language must be one of en, he, ar")
        return v

    # Payouts / revenue
    payout_default_method: str = "bank_transfer"
    revenue_trend_months: int = 12

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
