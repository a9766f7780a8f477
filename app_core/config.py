# app_core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CSV_URL = (
    "https://hebbkx1anhila5yf.public.blob.vercel-storage.com/"
    "text_data-TxcIugcuYaYqDyUrW97pwyWEJyCQWT.csv"
)
DEFAULT_RECENT_DAYS = 30


def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read once from the environment (and a local .env)."""

    csv_url: str = field(default_factory=lambda: os.getenv("SIGNAL_CSV_URL", DEFAULT_CSV_URL).strip())
    recent_days: int = field(
        default_factory=lambda: _positive_int(os.getenv("RECENT_DAYS_COUNT"), DEFAULT_RECENT_DAYS)
    )
    signal_marker: str = field(default_factory=lambda: os.getenv("SIGNAL_MARKER", "_signal"))
    date_column_index: int = 0
    request_timeout: int = field(default_factory=lambda: _positive_int(os.getenv("REQUEST_TIMEOUT_SECONDS"), 30))
    cache_ttl: int = field(default_factory=lambda: _positive_int(os.getenv("CSV_CACHE_TTL_SECONDS"), 900))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())


def load_settings() -> Settings:
    return Settings()


settings = load_settings()
