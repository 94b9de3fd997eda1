"""Configuration for the storefront.

Settings come from environment variables; a ``.env`` file in the working
directory is loaded first so local overrides need no shell exports.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_BASE_URL = "http://localhost:8080/api/products"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    base_url: str = DEFAULT_BASE_URL  # prefix for catalog prev/next links
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``STOREFRONT_*`` environment variables."""
        load_dotenv()
        data_dir = os.getenv("STOREFRONT_DATA_DIR")
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            base_url=os.getenv("STOREFRONT_BASE_URL", DEFAULT_BASE_URL).rstrip("?"),
            log_level=os.getenv("STOREFRONT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
