"""Load cleaned records into a repository.

Module notes:
- Each Dask partition is validated independently in a delayed task.
- Valid records are merged into the repository in one write; rows sharing an
  id with a stored record replace it.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from typing import cast, Any as TypingAny

import pandas as pd
import dask.dataframe as dd
from dask import delayed, compute  # type: ignore[attr-defined]

from bizops_pipeline.clean.transform import clean_records_ddf
from bizops_pipeline.clean.validate import validate_partition
from bizops_pipeline.errors import UnsupportedFormatError
from bizops_pipeline.store import RecordRepository

log = logging.getLogger(__name__)


def read_source(path: Path, blocksize: str | None = "16MB") -> Any:
    """Read a CSV or JSON-array export into a Dask DataFrame.

    All CSV columns are read as strings; typing happens in the clean step.
    """
    dd_mod = cast(TypingAny, dd)
    if path.suffix.lower() == ".json":
        pdf = pd.read_json(path, orient="records", dtype=False)
        return dd_mod.from_pandas(pdf, npartitions=1)
    if path.suffix.lower() == ".csv":
        return dd_mod.read_csv(str(path), dtype=str, blocksize=blocksize)
    raise UnsupportedFormatError(f"Unsupported import format: {path.suffix or path.name}")


def import_records(ddf: Any, repository: RecordRepository[Any]) -> tuple[int, int]:
    """Driver function.

    Cleans `ddf`, validates each partition against the repository's model and
    merges the valid records into the repository.

    Returns:
        `(good, bad)` row counts.
    """
    log.info("Importing records into %s...", repository.key)

    cleaned = clean_records_ddf(ddf)
    delayed_parts = cleaned.to_delayed()
    tasks = [delayed(validate_partition)(part, repository.model) for part in delayed_parts]

    # `compute` is untyped in our environment; cast to Any before calling
    results = cast(TypingAny, compute)(*tasks)  # tuple of (records, bad) per partition

    records = [r for part_records, _ in results for r in part_records]
    bad_total = sum(b for _, b in results)

    if records:
        repository.extend(records)

    log.info("Import complete for %s: good=%d bad=%d", repository.key, len(records), bad_total)
    return len(records), int(bad_total)
