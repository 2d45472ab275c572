"""Month-over-month and year-over-year change of period totals."""

from __future__ import annotations

from typing import Sequence

from bizops_pipeline.models import PeriodSummary, TrendEntry
from bizops_pipeline.periods import same_period_last_year


def compare_totals(period: str, current: float, prior: float) -> TrendEntry:
    """Return the change from `prior` to `current` for `period`.

    `change_percent` is rounded to one decimal and is `None` when `prior`
    is zero.
    """
    change = current - prior
    change_percent = None if prior == 0 else round(change / prior * 100, 1)
    return TrendEntry(period=period, change=change, change_percent=change_percent)


def compute_trends(summaries: Sequence[PeriodSummary]) -> list[TrendEntry]:
    """Compare each summary with the one before it.

    Args:
        summaries: Chronologically ordered summaries.

    Returns:
        One entry per adjacent pair, in input order; the first summary has
        nothing to compare with and yields no entry.
    """
    return [
        compare_totals(cur.period, cur.total, prev.total)
        for prev, cur in zip(summaries, summaries[1:])
    ]


def year_over_year_trends(summaries: Sequence[PeriodSummary]) -> list[TrendEntry]:
    """Compare each summary with the same month one year earlier.

    Only summaries whose prior-year month is also present produce an entry.
    """
    by_period = {s.period: s for s in summaries}
    out: list[TrendEntry] = []
    for cur in summaries:
        prior = by_period.get(same_period_last_year(cur.period))
        if prior is not None:
            out.append(compare_totals(cur.period, cur.total, prior.total))
    return out
