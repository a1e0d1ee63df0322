"""Environment-driven configuration for the Expense Dashboard."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_STORAGE_KEY = "expense-dashboard-data@v1"


def _env(key: str, default: str | None = None) -> str | None:
    """Read an env var, treating empty strings as unset."""

    value = os.environ.get(key)
    if value is not None and str(value).strip() != "":
        return value
    return default


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    storage_key: str
    timezone: str
    currency_symbol: str
    log_level: str
    log_path: Path | None


def load_settings() -> Settings:
    data_dir = Path(_env("EXPENSE_DASHBOARD_DATA_DIR", "data") or "data")
    storage_key = _env("EXPENSE_DASHBOARD_STORAGE_KEY", DEFAULT_STORAGE_KEY) or DEFAULT_STORAGE_KEY
    timezone = (_env("EXPENSE_DASHBOARD_TIMEZONE", "UTC") or "UTC").strip()
    currency_symbol = _env("EXPENSE_DASHBOARD_CURRENCY", "$") or "$"
    log_level = (_env("EXPENSE_DASHBOARD_LOG_LEVEL", "INFO") or "INFO").strip().upper()

    log_path_value = _env("EXPENSE_DASHBOARD_LOG_PATH")
    log_path = Path(log_path_value) if log_path_value else None

    return Settings(
        data_dir=data_dir,
        storage_key=storage_key,
        timezone=timezone,
        currency_symbol=currency_symbol,
        log_level=log_level,
        log_path=log_path,
    )
