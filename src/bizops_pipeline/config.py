"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads environment variables (after loading the project `.env`) and checks
that the selected storage backend is usable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

STORAGE_BACKENDS = ("json", "mongo")


@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        storage: Storage backend name (``json`` or ``mongo``).
        data_dir: Directory holding one JSON blob per collection.
        mongo_uri: MongoDB connection URI (mongo backend only).
        mongo_db: Target MongoDB database name.
        trailing_months: Default window for trailing monthly reports.
        known_categories: Optional category whitelist; unknown labels are
            logged, not rejected.
    """
    storage: str
    data_dir: Path
    mongo_uri: str | None
    mongo_db: str
    trailing_months: int = 12
    known_categories: frozenset[str] = field(default_factory=frozenset)


def _parse_categories(raw: str) -> frozenset[str]:
    return frozenset(c.strip() for c in raw.split(",") if c.strip())


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if the storage backend is unknown, `MONGO_URI` is missing
            for the mongo backend, or `BIZOPS_TRAILING_MONTHS` is not a
            positive integer.
    """
    storage = os.getenv("BIZOPS_STORAGE", "json").strip().lower()
    data_dir = Path(os.getenv("BIZOPS_DATA_DIR", "data/store"))
    mongo_uri = os.getenv("MONGO_URI", "").strip() or None
    mongo_db = os.getenv("MONGO_DB", "bizops")
    trailing_raw = os.getenv("BIZOPS_TRAILING_MONTHS", "12").strip()
    known_categories = _parse_categories(os.getenv("BIZOPS_KNOWN_CATEGORIES", ""))

    if storage not in STORAGE_BACKENDS:
        raise RuntimeError(
            f"BIZOPS_STORAGE must be one of {', '.join(STORAGE_BACKENDS)} (got {storage!r})."
        )

    if storage == "mongo" and not mongo_uri:
        raise RuntimeError(
            "MONGO_URI is required when BIZOPS_STORAGE=mongo. Set it in .env "
            "(example: 'mongodb://localhost:27017')."
        )

    try:
        trailing_months = int(trailing_raw)
    except ValueError:
        trailing_months = 0
    if trailing_months <= 0:
        raise RuntimeError(
            f"BIZOPS_TRAILING_MONTHS must be a positive integer (got {trailing_raw!r})."
        )

    return Settings(
        storage=storage,
        data_dir=data_dir,
        mongo_uri=mongo_uri,
        mongo_db=mongo_db,
        trailing_months=trailing_months,
        known_categories=known_categories,
    )
