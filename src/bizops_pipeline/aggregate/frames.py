"""pandas views of summaries and trends for display and export."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from bizops_pipeline.models import PeriodSummary, TrendEntry, YearlySummary

SUMMARY_COLUMNS = ["period", "total", "cost", "expenses", "gross_profit", "operating_profit"]
CATEGORY_PREFIX = "category:"


def summaries_frame(summaries: Sequence[PeriodSummary], with_categories: bool = True) -> pd.DataFrame:
    """Return one row per period; category totals become extra columns.

    Category columns are named `category:<label>` so a label can never
    shadow a report column. Categories absent from a period are filled with
    0 in that row.
    """
    rows = []
    for s in summaries:
        row = s.model_dump(exclude={"by_category"})
        if with_categories:
            row.update({f"{CATEGORY_PREFIX}{name}": amount for name, amount in s.by_category.items()})
        rows.append(row)
    if not rows:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    pdf = pd.DataFrame(rows)
    category_cols = [c for c in pdf.columns if c.startswith(CATEGORY_PREFIX)]
    if category_cols:
        pdf[category_cols] = pdf[category_cols].fillna(0)
    # drop profit columns nobody filled
    return pdf.dropna(axis=1, how="all")


def trends_frame(trends: Sequence[TrendEntry]) -> pd.DataFrame:
    """Return one row per trend entry."""
    if not trends:
        return pd.DataFrame(columns=["period", "change", "change_percent"])
    return pd.DataFrame([t.model_dump() for t in trends])


def yearly_frame(summaries: Sequence[YearlySummary]) -> pd.DataFrame:
    """Return one row per year without the nested monthly breakdown."""
    cols = ["year", "total", "cost", "expenses", "gross_profit", "operating_profit"]
    if not summaries:
        return pd.DataFrame(columns=cols)
    return pd.DataFrame([s.model_dump(exclude={"monthly"}) for s in summaries])[cols]
