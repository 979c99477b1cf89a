from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Runtime settings sourced from environment variables."""

    log_level: str = "INFO"
    # Remote offer configuration; no remote source is used when unset
    offers_url: Optional[str] = None
    # Resolved against the bundled resources directory when relative
    offers_file: str = "offers-config.json"
    refresh_interval_seconds: float = 3600.0
    http_timeout_seconds: float = 10.0

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            offers_url=os.getenv("OFFERS_URL") or None,
            offers_file=os.getenv("OFFERS_FILE", cls.offers_file),
            refresh_interval_seconds=float(
                os.getenv("OFFERS_REFRESH_INTERVAL_SECONDS", cls.refresh_interval_seconds)
            ),
            http_timeout_seconds=float(os.getenv("OFFERS_HTTP_TIMEOUT_SECONDS", cls.http_timeout_seconds)),
        )


def get_settings(_cache: dict[str, Settings] = {}) -> Settings:
    """Provide a simple cached settings object."""

    if "settings" not in _cache:
        _cache["settings"] = Settings.from_env()
    return _cache["settings"]
