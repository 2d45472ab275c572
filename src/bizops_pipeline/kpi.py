"""KPI progress ratios.

A metric counts as completed when its value reaches the standard target.
Percentages are whole numbers, rounded half up.
"""

from __future__ import annotations

import math
from typing import Iterable

from bizops_pipeline.models import KPI_CATEGORIES, KpiMetric, KpiProgress


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def achievement_rate(value: float, target: float) -> int | None:
    """Return `value` as a whole percentage of `target`; `None` for a zero target."""
    if target == 0:
        return None
    return _round_half_up(value / target * 100)


def achievement_rates(metric: KpiMetric) -> dict[str, int | None]:
    """Return the achievement rate against each of the three target levels."""
    return {
        "minimum": achievement_rate(metric.value, metric.minimum_target),
        "standard": achievement_rate(metric.value, metric.standard_target),
        "stretch": achievement_rate(metric.value, metric.stretch_target),
    }


def kpi_progress(metrics: Iterable[KpiMetric]) -> KpiProgress:
    """Count metrics that reached their standard target."""
    metrics = list(metrics)
    if not metrics:
        return KpiProgress(total=0, completed=0, percentage=0)
    completed = sum(1 for m in metrics if m.value >= m.standard_target)
    return KpiProgress(
        total=len(metrics),
        completed=completed,
        percentage=_round_half_up(completed / len(metrics) * 100),
    )


def kpi_progress_by_category(metrics: Iterable[KpiMetric]) -> dict[str, KpiProgress]:
    """Return progress per KPI category; categories without metrics are omitted."""
    metrics = list(metrics)
    out: dict[str, KpiProgress] = {}
    for category in KPI_CATEGORIES:
        subset = [m for m in metrics if m.category == category]
        if subset:
            out[category] = kpi_progress(subset)
    return out
