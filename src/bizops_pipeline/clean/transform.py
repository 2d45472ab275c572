"""Cleaning and normalization utilities.

This module contains transformations that are applied partition-wise using
Dask. The output is a Dask DataFrame whose schema is stable and suitable for
Pydantic validation.
"""
from __future__ import annotations

import pandas as pd
import logging
from typing import Any

log = logging.getLogger(__name__)

TEXT_COLUMNS = (
    "id",
    "category",
    "employee_id",
    "payee_id",
    "user_id",
    "month",
    "email",
    "department",
    "employment_type",
    "payment_cycle",
    "status",
)
FREE_TEXT_COLUMNS = ("client_name", "name", "notes", "description", "company", "contact_person")
DATE_COLUMNS = ("date", "start_date", "end_date", "payment_date", "paid_at")
NUMERIC_COLUMNS = (
    "amount",
    "cost",
    "expenses",
    "value",
    "minimum_target",
    "standard_target",
    "stretch_target",
    "salary",
    "contract_amount",
)


def _clean_partition(pdf: pd.DataFrame) -> pd.DataFrame:
    """Partition-level cleaning function applied via map_partitions.

    Args:
        pdf: Pandas DataFrame for the partition.

    Returns:
        Cleaned Pandas DataFrame.
    """
    pdf = pdf.copy()

    # -----------------------------
    # Trim identifiers and labels
    # -----------------------------
    for col in TEXT_COLUMNS:
        if col in pdf.columns:
            pdf[col] = pdf[col].astype("string").str.strip().replace({"": pd.NA})

    # -----------------------------
    # Normalize free text
    # -----------------------------
    for col in FREE_TEXT_COLUMNS:
        if col in pdf.columns:
            pdf[col] = (
                pdf[col]
                .astype("string")
                .str.strip()
                .str.replace(r"\s+", " ", regex=True)
                .replace({"": pd.NA})
            )

    # -----------------------------
    # Standardize dates (bad → NaT, rejected at validation)
    # -----------------------------
    for col in DATE_COLUMNS:
        if col in pdf.columns:
            pdf[col] = pd.to_datetime(pdf[col], errors="coerce", format="mixed")

    # -----------------------------
    # Coerce amounts
    # -----------------------------
    for col in NUMERIC_COLUMNS:
        if col in pdf.columns:
            pdf[col] = pd.to_numeric(pdf[col], errors="coerce")

    return pdf


def clean_records_ddf(ddf: Any) -> Any:
    """Clean raw record exports.

    Trims identifiers and category labels, collapses whitespace in free text,
    parses date columns and coerces numeric columns. Unparseable values become
    missing and are rejected by validation rather than guessed.

    Returns:
        Transformed Dask DataFrame with a stable schema for downstream steps.
    """
    log.info("Starting clean_records_ddf transformation")
    meta = _clean_partition(ddf._meta)
    return ddf.map_partitions(_clean_partition, meta=meta)
