"""Configuration helpers for hepref."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_CACHE_ROOT = Path.home() / ".hepref-cache"
DEFAULT_BASE_URL = "https://www.hepdata.net/record/"


class Settings(BaseModel):
    """Runtime configuration loaded from env vars with sensible defaults."""

    cache_root: Path = Field(default_factory=lambda: DEFAULT_CACHE_ROOT)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    log_level: str = "INFO"

    def ensure_directories(self) -> None:
        """Create the cache root if it is missing."""
        self.cache_root.mkdir(parents=True, exist_ok=True)

    @classmethod
    def load(cls) -> "Settings":
        load_dotenv()
        return cls(
            cache_root=Path(os.environ.get("HEPREF_CACHE_ROOT", DEFAULT_CACHE_ROOT)).expanduser(),
            base_url=os.environ.get("HEPREF_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.environ.get("HEPREF_TIMEOUT", "30")),
            log_level=os.environ.get("HEPREF_LOG_LEVEL", "INFO"),
        )


def get_settings() -> Settings:
    """Convenience accessor for the CLI."""
    settings = Settings.load()
    settings.ensure_directories()
    return settings
