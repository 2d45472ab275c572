"""Payment lookups for employees and contractors.

Payments reference their payee through `Payment.payee_id`; the employee and
contractor collections hold the payees themselves.
"""

from __future__ import annotations

from typing import Iterable

from bizops_pipeline.models import Payment
from bizops_pipeline.periods import parse_period


def payments_by_payee(payments: Iterable[Payment], payee_id: str) -> list[Payment]:
    """Return the payments made to `payee_id`, in stored order."""
    return [p for p in payments if p.payee_id == payee_id]


# employees and contractors share the payment shape
payments_by_employee = payments_by_payee
contractor_payments_by_contractor = payments_by_payee


def payments_by_month(payments: Iterable[Payment], month: str) -> list[Payment]:
    """Return the payments booked against payroll month `month` (``YYYY-MM``).

    Raises:
        InvalidPeriodError: if `month` is not a valid period key.
    """
    parse_period(month)
    return [p for p in payments if p.month == month]
