from __future__ import annotations

from datetime import date

import pytest

from bizops_pipeline.errors import InvalidPeriodError
from bizops_pipeline.models import Payment
from bizops_pipeline.payees import (
    contractor_payments_by_contractor,
    payments_by_employee,
    payments_by_month,
)


@pytest.fixture
def payments() -> list[Payment]:
    return [
        Payment(id="1", payee_id="1", amount=350000, month="2023-05", payment_date=date(2023, 5, 25),
                is_paid=True, paid_at=date(2023, 5, 25)),
        Payment(id="2", payee_id="2", amount=280000, month="2023-05", payment_date=date(2023, 5, 25)),
        Payment(id="3", payee_id="1", amount=350000, month="2023-06", payment_date=date(2023, 6, 25)),
    ]


def test_payments_by_employee(payments: list[Payment]) -> None:
    assert [p.id for p in payments_by_employee(payments, "1")] == ["1", "3"]
    assert payments_by_employee(payments, "9") == []


def test_contractor_payments_by_contractor(payments: list[Payment]) -> None:
    assert [p.id for p in contractor_payments_by_contractor(payments, "2")] == ["2"]


def test_payments_by_month(payments: list[Payment]) -> None:
    assert [p.id for p in payments_by_month(payments, "2023-05")] == ["1", "2"]
    assert payments_by_month(payments, "2023-07") == []
    with pytest.raises(InvalidPeriodError):
        payments_by_month(payments, "2023-5")
