"""Report service over the record repositories.

`ReportService` is the object the CLI (or any other front end) holds on to:
it reads the current collections from the repositories and hands them to the
pure aggregation functions on every call. Nothing is cached between calls.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from bizops_pipeline.aggregate.fixed_costs import expand_fixed_costs
from bizops_pipeline.aggregate.summary import build_summaries, build_yearly_summaries
from bizops_pipeline.aggregate.trends import compute_trends
from bizops_pipeline.errors import BizOpsError
from bizops_pipeline.kpi import kpi_progress, kpi_progress_by_category
from bizops_pipeline.models import (
    KpiProgress,
    MonetaryRecord,
    Payment,
    PeriodSummary,
    ReportFilters,
    TrendEntry,
    YearlySummary,
)
from bizops_pipeline.payees import (
    contractor_payments_by_contractor,
    payments_by_employee,
    payments_by_month,
)
from bizops_pipeline.periods import periods_of_year, trailing_periods
from bizops_pipeline.store import RecordRepository

log = logging.getLogger(__name__)

# collections whose records convert through `to_record()`
RECORD_COLLECTIONS = ("sales", "employee_payments", "contractor_payments")
PAYMENT_COLLECTIONS = ("employee_payments", "contractor_payments")


class ReportService:
    """Builds summaries, trends and KPI progress from persisted collections.

    Args:
        repositories: Repositories keyed by collection name (see
            `bizops_pipeline.store.COLLECTIONS`).
        trailing_months: Default window for trailing reports.
    """

    def __init__(self, repositories: dict[str, RecordRepository[Any]], trailing_months: int = 12) -> None:
        self.repositories = repositories
        self.trailing_months = trailing_months

    def _repo(self, name: str) -> RecordRepository[Any]:
        try:
            return self.repositories[name]
        except KeyError:
            raise BizOpsError(f"Unknown collection: {name!r}") from None

    def records(self, collection: str, periods: list[str] | None = None) -> list[MonetaryRecord]:
        """Return `collection` as monetary records.

        Fixed costs are expanded per month and therefore need `periods`.
        """
        if collection == "fixed_costs":
            if periods is None:
                raise BizOpsError("fixed_costs records need an explicit period list")
            return expand_fixed_costs(self._repo(collection).list(), periods)
        if collection not in RECORD_COLLECTIONS:
            raise BizOpsError(f"{collection!r} does not hold monetary records")
        return [item.to_record() for item in self._repo(collection).list()]

    # --------------------------------------------------
    # Monthly
    # --------------------------------------------------
    def summaries(
        self,
        collection: str,
        periods: list[str],
        filters: ReportFilters | None = None,
    ) -> list[PeriodSummary]:
        records = self.records(collection, periods)
        log.debug("Summarizing %d %s records over %d periods", len(records), collection, len(periods))
        return build_summaries(records, periods, filters.matches if filters else None)

    def monthly_summaries(
        self,
        collection: str,
        year: int,
        filters: ReportFilters | None = None,
    ) -> list[PeriodSummary]:
        """Return the twelve monthly summaries of `year`."""
        return self.summaries(collection, periods_of_year(year), filters)

    def trailing_summaries(
        self,
        collection: str,
        months: int | None = None,
        today: date | None = None,
        filters: ReportFilters | None = None,
    ) -> list[PeriodSummary]:
        """Return summaries for the last `months` months ending at `today`."""
        periods = trailing_periods(self.trailing_months if months is None else months, today)
        return self.summaries(collection, periods, filters)

    def trends(
        self,
        collection: str,
        months: int | None = None,
        today: date | None = None,
        filters: ReportFilters | None = None,
    ) -> list[TrendEntry]:
        """Month-over-month trends across the trailing window."""
        return compute_trends(self.trailing_summaries(collection, months, today, filters))

    def fixed_cost_summaries(self, months: int | None = None, today: date | None = None) -> list[PeriodSummary]:
        return self.trailing_summaries("fixed_costs", months, today)

    # --------------------------------------------------
    # Yearly
    # --------------------------------------------------
    def yearly_summaries(
        self,
        collection: str,
        start_year: int,
        end_year: int,
        filters: ReportFilters | None = None,
    ) -> list[YearlySummary]:
        periods = [p for y in range(start_year, end_year + 1) for p in periods_of_year(y)]
        return build_yearly_summaries(start_year, end_year, self.records(collection, periods), filters)

    def current_year_summary(self, collection: str = "sales", today: date | None = None) -> YearlySummary:
        year = (today or date.today()).year
        return self.yearly_summaries(collection, year, year)[0]

    # --------------------------------------------------
    # Payees
    # --------------------------------------------------
    def employee_payments(self, employee_id: str) -> list[Payment]:
        """Payments made to one employee; raises `RecordNotFoundError` for an unknown id."""
        self._repo("employees").get(employee_id)
        return payments_by_employee(self._repo("employee_payments").list(), employee_id)

    def contractor_payments(self, contractor_id: str) -> list[Payment]:
        """Payments made to one contractor; raises `RecordNotFoundError` for an unknown id."""
        self._repo("contractors").get(contractor_id)
        return contractor_payments_by_contractor(self._repo("contractor_payments").list(), contractor_id)

    def payments_for_month(self, collection: str, month: str) -> list[Payment]:
        """All payments of `collection` booked against payroll month `month`."""
        if collection not in PAYMENT_COLLECTIONS:
            raise BizOpsError(f"{collection!r} does not hold payments")
        return payments_by_month(self._repo(collection).list(), month)

    # --------------------------------------------------
    # KPI
    # --------------------------------------------------
    def kpi_overview(self, user_id: str | None = None) -> dict[str, Any]:
        """Return overall and per-category KPI progress, optionally for one user."""
        metrics = self._repo("kpi_metrics").list()
        if user_id is not None:
            metrics = [m for m in metrics if m.user_id == user_id]
        overall: KpiProgress = kpi_progress(metrics)
        return {"overall": overall, "by_category": kpi_progress_by_category(metrics)}
