from __future__ import annotations

from datetime import date

import pytest

from bizops_pipeline.models import MonetaryRecord


@pytest.fixture
def scenario_records() -> list[MonetaryRecord]:
    return [
        MonetaryRecord(id="1", date=date(2023, 1, 15), amount=500000, category="A"),
        MonetaryRecord(id="2", date=date(2023, 1, 20), amount=100000, category="B"),
        MonetaryRecord(id="3", date=date(2023, 2, 1), amount=300000, category="A"),
    ]


@pytest.fixture
def sales_records() -> list[MonetaryRecord]:
    return [
        MonetaryRecord(id="1", date=date(2023, 1, 15), amount=500000, cost=300000, expenses=50000,
                       category="web", employee_id="1"),
        MonetaryRecord(id="2", date=date(2023, 2, 10), amount=300000, cost=150000, expenses=30000,
                       category="consulting", employee_id="2"),
        MonetaryRecord(id="3", date=date(2023, 2, 25), amount=1200000, cost=700000, expenses=100000,
                       category="apps", employee_id="2"),
        MonetaryRecord(id="4", date=date(2023, 3, 5), amount=800000, cost=450000, expenses=80000,
                       category="web", employee_id="1"),
    ]
