"""Validation utilities for imported records.

This module validates partition data against a Pydantic collection model,
converting pandas scalars (NaN, NaT, Timestamp) into native Python values
first.
"""
from __future__ import annotations

import logging
import math
import uuid
from typing import Any, TypeVar

import numpy as np
import pandas as pd
from pydantic import BaseModel, ValidationError

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _native(value: Any) -> Any:
    if value is None or value is pd.NaT or value is pd.NA:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, np.generic):
        return value.item()
    return value


def validate_partition(pdf: pd.DataFrame, model: type[M]) -> tuple[list[M], int]:
    """Validate a pandas partition of records using Pydantic.

    Missing values are dropped so that optional fields take their defaults
    and required ones fail validation. Rows without an id get a fresh one.

    Args:
        pdf: Pandas DataFrame for the partition.
        model: Collection model each row must satisfy.

    Returns:
        A tuple of (list_of_validated_records, bad_count).
    """
    good: list[M] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        doc = {k: _native(v) for k, v in rec.items()}
        doc = {k: v for k, v in doc.items() if v is not None}
        doc.setdefault("id", uuid.uuid4().hex)

        try:
            good.append(model.model_validate(doc))
        except ValidationError as exc:
            bad += 1
            log.warning("Rejected %s row %s: %d error(s)", model.__name__, doc["id"], exc.error_count())

    return good, bad
