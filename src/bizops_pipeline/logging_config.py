"""Utilities to configure consistent logging across the pipeline.

The level comes from the caller, else from ``BIZOPS_LOG_LEVEL``, else INFO.
Dask and pymongo log heavily at INFO/DEBUG; their loggers are held at
WARNING unless the pipeline itself runs at DEBUG.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_LEVEL_ENV = "BIZOPS_LOG_LEVEL"

NOISY_LOGGERS = ("distributed", "fsspec", "pymongo", "asyncio")


def resolve_level(level: int | str | None = None) -> int:
    """Turn a level name or number (or the env default) into a logging level.

    Raises:
        RuntimeError: for a level name `logging` does not know.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "").strip() or logging.INFO
    if isinstance(level, int):
        return level
    if level.isdigit():
        return int(level)
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise RuntimeError(f"{LOG_LEVEL_ENV}: unknown log level {level!r}")
    return resolved


def configure_logging(log_path: Path | None = None, level: int | str | None = None) -> int:
    """Configure root logging handlers and formatting.

    Args:
        log_path: Optional path to a file where logs will be written.
        level: Logging level or level name; see `resolve_level`.

    Returns:
        The level the root logger was set to.
    """
    root_level = resolve_level(level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    # force: repeated CLI invocations in one process replace the handlers
    logging.basicConfig(
        level=root_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    third_party = logging.NOTSET if root_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party)
    return root_level
