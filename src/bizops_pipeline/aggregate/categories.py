"""Per-category sums within one bucket."""

from __future__ import annotations

import math
from typing import Iterable

from bizops_pipeline.models import MonetaryRecord


def aggregate_by_category(records: Iterable[MonetaryRecord]) -> dict[str, float]:
    """Sum `amount` per category label.

    Labels are matched exactly (case-sensitive, no trimming beyond what the
    model already did). Categories with no records get no entry. Each sum is
    exact-then-rounded (`math.fsum`), so it does not depend on record order.
    """
    grouped: dict[str, list[float]] = {}
    for rec in records:
        grouped.setdefault(rec.category, []).append(rec.amount)
    return {cat: math.fsum(amounts) for cat, amounts in grouped.items()}


def total_of(by_category: dict[str, float]) -> float:
    """Grand total of an `aggregate_by_category` mapping; 0 when empty."""
    return sum(by_category.values(), 0)


def total(records: Iterable[MonetaryRecord]) -> float:
    """Sum `amount` over all records; 0 for an empty bucket.

    Always equal to the sum of the per-category values.
    """
    return total_of(aggregate_by_category(records))


def category_shares(by_category: dict[str, float], grand_total: float) -> dict[str, float]:
    """Return each category's percentage of `grand_total`, one decimal.

    Returns an empty mapping when the total is zero.
    """
    if grand_total == 0:
        return {}
    return {cat: round(amount / grand_total * 100, 1) for cat, amount in by_category.items()}
