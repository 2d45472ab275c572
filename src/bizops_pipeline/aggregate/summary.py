"""Period and yearly summary builders.

Expectations:
- Input: `MonetaryRecord` collections; sales transactions carry `cost` and
  `expenses`, other collections do not.
- Outputs: `PeriodSummary` / `YearlySummary` models. Profit fields are only
  filled when every contributing record carried `cost` and `expenses`; a
  partially costed bucket leaves them as `None` rather than understating cost.
"""
from __future__ import annotations

import math
from typing import Iterable, Sequence

from bizops_pipeline.aggregate.bucketing import RecordFilter, bucket_by_period
from bizops_pipeline.aggregate.categories import aggregate_by_category, category_shares, total_of
from bizops_pipeline.errors import InvalidReportRequestError
from bizops_pipeline.models import MonetaryRecord, PeriodSummary, ReportFilters, YearlySummary
from bizops_pipeline.periods import parse_period, periods_of_year


# =========================================================
# MONTHLY
# =========================================================

def build_summary(period: str, records: Sequence[MonetaryRecord]) -> PeriodSummary:
    """Summarize the records of a single period.

    Args:
        period: `YYYY-MM` key the records belong to.
        records: The bucket's records (may be empty).

    Returns:
        `PeriodSummary` with total and per-category sums, plus cost,
        expenses, gross and operating profit when every record is costed.
    """
    parse_period(period)
    by_category = aggregate_by_category(records)
    amount = total_of(by_category)

    costed = bool(records) and all(
        r.cost is not None and r.expenses is not None for r in records
    )
    if not costed:
        return PeriodSummary(period=period, total=amount, by_category=by_category)

    cost = math.fsum(r.cost for r in records)
    expenses = math.fsum(r.expenses for r in records)
    gross_profit = amount - cost
    return PeriodSummary(
        period=period,
        total=amount,
        by_category=by_category,
        cost=cost,
        expenses=expenses,
        gross_profit=gross_profit,
        operating_profit=gross_profit - expenses,
    )


def build_summaries(
    all_records: Iterable[MonetaryRecord],
    periods: Iterable[str],
    period_filter: RecordFilter | None = None,
) -> list[PeriodSummary]:
    """Build one summary per requested period, oldest first.

    Periods without records still get a zero summary. Records dated outside
    the requested periods are ignored.

    Args:
        all_records: Full record collection.
        periods: Period keys to report on (duplicates collapse).
        period_filter: Optional predicate applied before bucketing.
    """
    buckets = bucket_by_period(all_records, period_filter)
    wanted = sorted(set(periods))
    for p in wanted:
        parse_period(p)
    return [build_summary(p, buckets.get(p, [])) for p in wanted]


# =========================================================
# YEARLY
# =========================================================

def build_yearly_summary(
    year: int,
    records: Iterable[MonetaryRecord],
    filters: ReportFilters | None = None,
) -> YearlySummary:
    """Roll the twelve months of `year` up into a `YearlySummary`.

    Profit fields are filled when every non-empty month carried them; empty
    months contribute zero.
    """
    monthly = build_summaries(
        records,
        periods_of_year(year),
        filters.matches if filters is not None else None,
    )
    year_total = sum((m.total for m in monthly), 0)

    active = [m for m in monthly if m.by_category]
    if not active or not all(m.has_profit for m in active):
        return YearlySummary(year=year, total=year_total, monthly=monthly)

    cost = sum((m.cost for m in active), 0)
    expenses = sum((m.expenses for m in active), 0)
    return YearlySummary(
        year=year,
        total=year_total,
        cost=cost,
        expenses=expenses,
        gross_profit=year_total - cost,
        operating_profit=year_total - cost - expenses,
        monthly=monthly,
    )


def build_yearly_summaries(
    start_year: int,
    end_year: int,
    records: Iterable[MonetaryRecord],
    filters: ReportFilters | None = None,
) -> list[YearlySummary]:
    """Return a `YearlySummary` for each year in ``start_year..end_year``."""
    if end_year < start_year:
        raise InvalidReportRequestError(
            f"end_year {end_year} must not be before start_year {start_year}"
        )
    records = list(records)
    return [build_yearly_summary(y, records, filters) for y in range(start_year, end_year + 1)]


# =========================================================
# RATIOS
# =========================================================

def profit_margins(summary: PeriodSummary | YearlySummary) -> dict[str, float | None]:
    """Return gross and operating margin in percent, one decimal.

    Margins are 0.0 when the total is not positive and `None` when the
    summary carries no profit fields.
    """
    if summary.gross_profit is None or summary.operating_profit is None:
        return {"gross_margin": None, "operating_margin": None}
    if summary.total <= 0:
        return {"gross_margin": 0.0, "operating_margin": 0.0}
    return {
        "gross_margin": round(summary.gross_profit / summary.total * 100, 1),
        "operating_margin": round(summary.operating_profit / summary.total * 100, 1),
    }


def summary_category_shares(summary: PeriodSummary) -> dict[str, float]:
    """Percentage of the period total taken by each category."""
    return category_shares(summary.by_category, summary.total)
