"""File helpers shared by the JSON-backed repositories.

Each collection is a single JSON array on disk.  Read and write
failures are re-raised as RepositoryError so callers only ever see
domain exceptions.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from storefront.domain.exceptions import RepositoryError

logger = logging.getLogger(__name__)


def ensure_file(path: Path) -> None:
    try:
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("[]", encoding="utf-8")
    except OSError as exc:
        logger.error("Cannot create data file %s: %s", path, exc)
        raise RepositoryError(f"Cannot create data file {path}") from exc


def load_records(path: Path) -> list[dict]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Cannot read data file %s: %s", path, exc)
        raise RepositoryError(f"Cannot read data file {path}") from exc
    if not isinstance(raw, list):
        raise RepositoryError(f"Data file {path} must contain a JSON array")
    return raw


def persist_records(path: Path, records: list[dict]) -> None:
    try:
        path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.error("Cannot write data file %s: %s", path, exc)
        raise RepositoryError(f"Cannot write data file {path}") from exc


def next_numeric_id(records: list[dict]) -> str:
    """Next ID after the largest numeric ID in use, as a string."""
    numeric = [int(r["id"]) for r in records if str(r.get("id", "")).isdigit()]
    return str(max(numeric) + 1) if numeric else "1"
