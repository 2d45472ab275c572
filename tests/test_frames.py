from __future__ import annotations

from datetime import date

from bizops_pipeline.aggregate.frames import summaries_frame, trends_frame, yearly_frame
from bizops_pipeline.aggregate.summary import build_summaries, build_summary, build_yearly_summaries
from bizops_pipeline.aggregate.trends import compute_trends
from bizops_pipeline.models import MonetaryRecord


def test_category_named_like_a_report_column_keeps_total() -> None:
    recs = [
        MonetaryRecord(id="1", date=date(2023, 5, 2), amount=5, category="total"),
        MonetaryRecord(id="2", date=date(2023, 5, 9), amount=7, category="other"),
    ]
    pdf = summaries_frame([build_summary("2023-05", recs)])
    assert pdf.loc[0, "total"] == 12
    assert pdf.loc[0, "category:total"] == 5
    assert pdf.loc[0, "category:other"] == 7


def test_missing_categories_fill_with_zero(scenario_records: list[MonetaryRecord]) -> None:
    pdf = summaries_frame(build_summaries(scenario_records, ["2023-01", "2023-02"]))
    assert list(pdf["period"]) == ["2023-01", "2023-02"]
    assert list(pdf["category:B"]) == [100000, 0]
    # no record was costed
    assert "gross_profit" not in pdf.columns


def test_frames_without_categories_or_rows(sales_records: list[MonetaryRecord]) -> None:
    pdf = summaries_frame(build_summaries(sales_records, ["2023-01"]), with_categories=False)
    assert not any(c.startswith("category:") for c in pdf.columns)
    assert pdf.loc[0, "operating_profit"] == 150000

    assert summaries_frame([]).empty
    assert trends_frame([]).empty
    assert yearly_frame([]).empty


def test_trend_and_yearly_frames(sales_records: list[MonetaryRecord]) -> None:
    summaries = build_summaries(sales_records, ["2023-01", "2023-02"])
    trends = trends_frame(compute_trends(summaries))
    assert list(trends["change"]) == [1000000]

    yearly = yearly_frame(build_yearly_summaries(2023, 2023, sales_records))
    assert list(yearly.columns) == ["year", "total", "cost", "expenses", "gross_profit", "operating_profit"]
    assert yearly.loc[0, "total"] == 2800000
