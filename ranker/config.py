"""Centralised settings for the tariff ranker.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in _TRUTHY


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "RANKER_USER_AGENT",
            "Mozilla/5.0 (compatible; TariffRanker/1.0)",
        )
    )
    follow_redirects: bool = field(
        default_factory=lambda: _env_flag("FOLLOW_REDIRECTS", "true")
    )

    # ------------------------------------------------------------------
    # HTML parsing
    # ------------------------------------------------------------------
    # False: ignore recoverable markup errors.  True: fail on the first one.
    strict_html: bool = field(
        default_factory=lambda: _env_flag("STRICT_HTML", "false")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "WARNING").upper()
    )


# Module-level singleton; import this everywhere:
#   from ranker.config import settings
settings = Settings()
