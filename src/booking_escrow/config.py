"""Application configuration via pydantic-settings.

Reads from a .env file or ESCROW_-prefixed environment variables. All
settings are validated at load time, so a bad value (e.g. a zero platform
fee) fails fast with a clear error message.

Usage:
    from booking_escrow.config import get_settings
    settings = get_settings()
    print(settings.platform_fee)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the booking escrow ledger."""

    model_config = SettingsConfigDict(
        env_prefix="ESCROW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"
    json_logs: bool = False

    # --- Ledger ---
    admin: str = "ST1ADMIN"
    platform_fee: int = Field(default=100, gt=0)
    holding_account: str = "contract"
    initial_block_height: int = Field(default=0, ge=0)

    # --- Booking Validation ---
    # The registry validator only accepts deposits once a contract is
    # registered under this id.
    booking_contract_id: int = 1
    default_guide: str = "ST1GUIDE"

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings."""
    return Settings()
