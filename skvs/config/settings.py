"""
SKVS Configuration Settings

All configuration constants for the store and its command-line front end.
Values are read from the environment once, at import time.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Store and command-line settings."""

    # Listen address (printed at startup, never bound)
    ADDRESS: str = os.environ.get("SKVS_ADDRESS", "localhost:8000")

    # Persistence settings
    STORE_PATH: str = os.environ.get("SKVS_STORE_PATH", "store.json")
    SNAPSHOT_INDENT: Optional[int] = None  # None writes compact JSON
    SNAPSHOT_ENCODING: str = "utf-8"

    # Logging settings
    DEBUG: bool = os.environ.get("SKVS_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("SKVS_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()
