# app/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_API_BASE = "https://api.telegram.org"


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration, read from the process environment.

    Only the bot token is required. Without it the webhook still starts
    but answers every update with a 500.
    """

    telegram_bot_token: Optional[str] = None
    telegram_api_base: str = DEFAULT_API_BASE
    telegram_timeout: float = 10.0
    log_level: str = "INFO"
    port: int = 10000

    @classmethod
    def from_env(cls) -> "Settings":
        token = (os.getenv("TELEGRAM_BOT_TOKEN") or "").strip()
        return cls(
            telegram_bot_token=token or None,
            telegram_api_base=os.getenv("TELEGRAM_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            telegram_timeout=float(os.getenv("TELEGRAM_TIMEOUT", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            port=int(os.getenv("PORT", "10000")),
        )

    @property
    def has_token(self) -> bool:
        return bool(self.telegram_bot_token)
