from __future__ import annotations

from datetime import date, datetime

import pytest

from bizops_pipeline.errors import InvalidPeriodError, InvalidRecordError, InvalidReportRequestError
from bizops_pipeline.periods import (
    next_period,
    parse_period,
    period_bounds,
    period_key_of,
    periods_of_year,
    previous_period,
    same_period_last_year,
    trailing_periods,
)


def test_period_key_zero_pads_month() -> None:
    assert period_key_of(date(2023, 3, 31)) == "2023-03"
    assert period_key_of(datetime(2023, 11, 1, 23, 59)) == "2023-11"
    assert period_key_of("2024-02-29") == "2024-02"


def test_period_key_rejects_unparseable_dates() -> None:
    with pytest.raises(InvalidRecordError):
        period_key_of("2023-13-01")
    with pytest.raises(InvalidRecordError):
        period_key_of(20230101)  # type: ignore[arg-type]


@pytest.mark.parametrize("day", [1, 15, 31])
def test_previous_period_of_january_is_last_december(day: int) -> None:
    assert previous_period(period_key_of(date(2023, 1, day))) == "2022-12"


def test_previous_and_next_period() -> None:
    assert previous_period("2023-07") == "2023-06"
    assert next_period("2023-12") == "2024-01"
    assert same_period_last_year("2024-02") == "2023-02"


def test_parse_period_rejects_malformed_keys() -> None:
    for bad in ("2023-1", "2023-00", "2023-13", "0000-05", "23-01", "2023/01"):
        with pytest.raises(InvalidPeriodError):
            parse_period(bad)


def test_keys_sort_chronologically() -> None:
    keys = ["2023-10", "2022-12", "2023-02", "2023-01"]
    assert sorted(keys) == ["2022-12", "2023-01", "2023-02", "2023-10"]


def test_trailing_periods_cross_year_boundary() -> None:
    assert trailing_periods(3, date(2023, 2, 14)) == ["2022-12", "2023-01", "2023-02"]
    assert len(trailing_periods(12, date(2023, 6, 1))) == 12


def test_periods_of_year_and_bounds() -> None:
    keys = periods_of_year(2024)
    assert keys[0] == "2024-01" and keys[-1] == "2024-12"
    assert period_bounds("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    assert period_bounds("2023-12") == (date(2023, 12, 1), date(2023, 12, 31))


def test_trailing_periods_rejects_empty_window() -> None:
    for n in (0, -1):
        with pytest.raises(InvalidReportRequestError):
            trailing_periods(n, date(2023, 2, 14))
