from __future__ import annotations

from bizops_pipeline.aggregate.trends import compute_trends, year_over_year_trends
from bizops_pipeline.models import PeriodSummary


def _summaries(*pairs: tuple[str, float]) -> list[PeriodSummary]:
    return [PeriodSummary(period=p, total=t) for p, t in pairs]


def test_trend_change_and_percent() -> None:
    (entry,) = compute_trends(_summaries(("2023-01", 600000), ("2023-02", 300000)))
    assert entry.period == "2023-02"
    assert entry.change == -300000
    assert entry.change_percent == -50.0


def test_zero_prior_total_yields_none() -> None:
    (entry,) = compute_trends(_summaries(("2023-01", 0), ("2023-02", 100)))
    assert entry.change == 100
    assert entry.change_percent is None


def test_trend_length_is_one_shorter() -> None:
    assert compute_trends([]) == []
    assert compute_trends(_summaries(("2023-01", 5))) == []
    seq = _summaries(("2023-01", 1), ("2023-02", 2), ("2023-03", 4), ("2023-04", 3))
    out = compute_trends(seq)
    assert len(out) == 3
    assert [e.period for e in out] == ["2023-02", "2023-03", "2023-04"]


def test_percent_rounded_to_one_decimal() -> None:
    (entry,) = compute_trends(_summaries(("2023-01", 3), ("2023-02", 4)))
    assert entry.change_percent == 33.3


def test_year_over_year_only_where_prior_year_present() -> None:
    seq = _summaries(("2022-01", 200), ("2022-02", 0), ("2023-01", 300), ("2023-02", 50), ("2023-03", 10))
    out = year_over_year_trends(seq)
    assert [(e.period, e.change, e.change_percent) for e in out] == [
        ("2023-01", 100, 50.0),
        ("2023-02", 50, None),
    ]
