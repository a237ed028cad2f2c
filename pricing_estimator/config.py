"""
Application configuration using Pydantic Settings.
All tunable values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "Pricing Estimator"
    default_industry: str = "consulting"

    # ── Debounce windows (milliseconds) ──────────────────
    field_debounce_ms: int = 300
    services_debounce_ms: int = 500
    variables_debounce_ms: int = 500

    # ── Validation bounds ────────────────────────────────
    min_employees: int = 1
    max_employees: int = 10000
    max_revenue: float = 1000.0  # million NOK
    max_transactions: int = 100000

    # ── Display ──────────────────────────────────────────
    currency_code: str = "NOK"
    currency_suffix: str = "kr"

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "PRICING_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
