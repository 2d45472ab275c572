"""Expand fixed costs into per-month records.

A one-time cost applies only to the month of its start date. A recurring cost
applies to every month its ``start_date..end_date`` range overlaps (open
ended when `end_date` is unset). Expanded records are dated the first day of
the month so they bucket like any other record.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable

from bizops_pipeline.models import FixedCost, MonetaryRecord
from bizops_pipeline.periods import period_bounds


def applies_to_period(cost: FixedCost, period: str) -> bool:
    """Return True when `cost` is due in `period`."""
    first, last = period_bounds(period)
    if not cost.is_recurring:
        return first <= cost.start_date <= last
    end = cost.end_date or date.max
    return cost.start_date <= last and end >= first


def costs_for_period(costs: Iterable[FixedCost], period: str) -> list[FixedCost]:
    """Return the costs due in `period`, in input order."""
    return [c for c in costs if applies_to_period(c, period)]


def expand_fixed_costs(costs: Iterable[FixedCost], periods: Iterable[str]) -> list[MonetaryRecord]:
    """Emit one record per (cost, period) pair where the cost is due."""
    costs = list(costs)
    out: list[MonetaryRecord] = []
    for period in sorted(set(periods)):
        first, _ = period_bounds(period)
        for c in costs_for_period(costs, period):
            out.append(
                MonetaryRecord(
                    id=f"{c.id}:{period}",
                    date=first,
                    amount=c.amount,
                    category=c.category,
                )
            )
    return out
