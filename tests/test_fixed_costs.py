from __future__ import annotations

from datetime import date

from bizops_pipeline.aggregate.fixed_costs import costs_for_period, expand_fixed_costs
from bizops_pipeline.aggregate.summary import build_summaries
from bizops_pipeline.models import FixedCost

COSTS = [
    FixedCost(id="rent", name="Office rent", amount=350000, category="real_estate",
              start_date=date(2022, 1, 1), is_recurring=True),
    FixedCost(id="server", name="Hosting", amount=45000, category="IT",
              start_date=date(2022, 2, 1), end_date=date(2023, 1, 15), is_recurring=True),
    FixedCost(id="desk", name="Desks", amount=80000, category="office",
              start_date=date(2023, 2, 10), is_recurring=False),
]


def test_recurring_costs_cover_their_range() -> None:
    assert [c.id for c in costs_for_period(COSTS, "2022-01")] == ["rent"]
    assert [c.id for c in costs_for_period(COSTS, "2023-01")] == ["rent", "server"]
    assert [c.id for c in costs_for_period(COSTS, "2023-02")] == ["rent", "desk"]


def test_one_time_cost_only_in_start_month() -> None:
    assert "desk" not in [c.id for c in costs_for_period(COSTS, "2023-03")]


def test_expanded_costs_feed_summaries() -> None:
    periods = ["2023-01", "2023-02", "2023-03"]
    records = expand_fixed_costs(COSTS, periods)
    assert {r.id for r in records} >= {"rent:2023-01", "server:2023-01", "desk:2023-02"}
    assert all(r.date.day == 1 for r in records)

    out = build_summaries(records, periods)
    assert [s.total for s in out] == [395000, 430000, 350000]
    assert out[1].by_category == {"real_estate": 350000, "office": 80000}
