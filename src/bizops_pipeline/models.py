"""Pydantic models used for boundary validation and report outputs.

Stored collections (transactions, fixed costs, employees, contractors,
payments, KPI metrics) are validated here before anything reaches the
aggregation functions. Derived views (`PeriodSummary`, `TrendEntry`,
`YearlySummary`) are never persisted.
"""

from __future__ import annotations

import datetime as dt
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

PERIOD_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]

KpiType = Literal["appointments", "closings", "contract_negotiations", "contract_closings"]
KpiCategory = Literal["sales", "development"]

KPI_CATEGORIES: tuple[str, ...] = ("sales", "development")

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

Role = Literal["admin", "employee"]
EmploymentType = Literal["正社員", "契約社員", "パート", "アルバイト", "業務委託"]
AccountType = Literal["普通", "当座"]
PaymentCycle = Literal["月次", "週次", "完了時"]
ContractStatus = Literal["進行中", "完了", "中断"]


# =========================================================
# AGGREGATION INPUT
# =========================================================

class MonetaryRecord(BaseModel):
    """A dated, categorized amount: the only shape the aggregation core reads.

    `cost` and `expenses` are carried by sales transactions only; fixed costs
    and payments leave them unset.
    """
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)
    id: str = Field(..., min_length=1)
    date: dt.date
    amount: FiniteFloat
    category: str = Field(..., min_length=1)
    employee_id: str | None = None
    cost: FiniteFloat | None = None
    expenses: FiniteFloat | None = None


class ReportFilters(BaseModel):
    """Optional narrowing applied to records before bucketing.

    Date bounds are inclusive; unset fields do not filter.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    employee_id: str | None = None
    category: str | None = None

    def matches(self, record: MonetaryRecord) -> bool:
        if self.start_date is not None and record.date < self.start_date:
            return False
        if self.end_date is not None and record.date > self.end_date:
            return False
        if self.employee_id is not None and record.employee_id != self.employee_id:
            return False
        if self.category is not None and record.category != self.category:
            return False
        return True


# =========================================================
# STORED COLLECTIONS
# =========================================================

class FinancialTransaction(BaseModel):
    """A sales transaction with its cost of goods and operating expenses."""
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)
    id: str = Field(..., min_length=1)
    date: dt.date
    client_name: str
    amount: FiniteFloat
    cost: FiniteFloat
    expenses: FiniteFloat
    employee_id: str
    category: str = Field(..., min_length=1)
    notes: str | None = None

    def to_record(self) -> MonetaryRecord:
        return MonetaryRecord(
            id=self.id,
            date=self.date,
            amount=self.amount,
            category=self.category,
            employee_id=self.employee_id,
            cost=self.cost,
            expenses=self.expenses,
        )


class FixedCost(BaseModel):
    """A fixed cost, either one-time (in its start month) or recurring.

    Attributes:
        start_date: First day the cost applies.
        end_date: Last day a recurring cost applies; open-ended when unset.
        is_recurring: Recurring costs apply to every month they overlap.
    """
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)
    id: str = Field(..., min_length=1)
    name: str
    amount: FiniteFloat
    category: str = Field(..., min_length=1)
    start_date: dt.date
    end_date: dt.date | None = None
    description: str | None = None
    is_recurring: bool

    @model_validator(mode="after")
    def _check_range(self) -> "FixedCost":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class Payment(BaseModel):
    """A salary or contractor payment booked against a payroll month."""
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)
    id: str = Field(..., min_length=1)
    payee_id: str = Field(..., min_length=1)
    amount: FiniteFloat = Field(..., ge=0)
    month: str = Field(..., pattern=PERIOD_PATTERN)
    payment_date: dt.date
    is_paid: bool = False
    paid_at: dt.date | None = None
    notes: str | None = None

    def to_record(self) -> MonetaryRecord:
        """Return the payment as a record dated the first day of its month."""
        year, month = (int(part) for part in self.month.split("-"))
        return MonetaryRecord(
            id=self.id,
            date=dt.date(year, month, 1),
            amount=self.amount,
            category="paid" if self.is_paid else "unpaid",
            employee_id=self.payee_id,
        )


class BankInfo(BaseModel):
    """Transfer destination for salary and contractor payments."""
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)
    bank_name: str = Field(..., min_length=1)
    branch_name: str = Field(..., min_length=1)
    account_type: AccountType
    account_number: str = Field(..., pattern=r"^\d+$")
    account_name: str = Field(..., min_length=1)


class Employee(BaseModel):
    """A staff member on payroll; the payee of `employee_payments`."""
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    role: Role = "employee"
    department: str
    avatar: str | None = None
    employment_type: EmploymentType
    start_date: dt.date
    salary: FiniteFloat = Field(..., ge=0)
    bank_info: BankInfo | None = None
    document_url: str | None = None


class Contractor(BaseModel):
    """An outside contractor; the payee of `contractor_payments`.

    Attributes:
        contract_amount: Amount due per payment cycle.
        end_date: Contract end; open-ended when unset.
    """
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    company: str | None = None
    contact_person: str | None = None
    start_date: dt.date
    end_date: dt.date | None = None
    contract_amount: FiniteFloat = Field(..., ge=0)
    payment_cycle: PaymentCycle
    bank_info: BankInfo | None = None
    document_url: str | None = None
    status: ContractStatus = "進行中"

    @model_validator(mode="after")
    def _check_range(self) -> "Contractor":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class KpiMetric(BaseModel):
    """A KPI measurement for one user on one day, with three target levels."""
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)
    id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    type: KpiType
    name: str
    category: KpiCategory
    value: float = Field(..., ge=0)
    minimum_target: float = Field(..., ge=0)
    standard_target: float = Field(..., ge=0)
    stretch_target: float = Field(..., ge=0)
    unit: str = "件"
    date: dt.date
    description: str | None = None


# =========================================================
# DERIVED VIEWS
# =========================================================

class PeriodSummary(BaseModel):
    """Totals for one `YYYY-MM` period.

    Profit fields are `None` unless every record of the period carried both
    `cost` and `expenses`.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    period: str = Field(..., pattern=PERIOD_PATTERN)
    total: float
    by_category: dict[str, float] = Field(default_factory=dict)
    cost: float | None = None
    expenses: float | None = None
    gross_profit: float | None = None
    operating_profit: float | None = None

    @property
    def has_profit(self) -> bool:
        return self.cost is not None and self.expenses is not None


class TrendEntry(BaseModel):
    """Change of a period's total against the period it is compared with.

    `change_percent` is `None` when the earlier total is zero.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    period: str = Field(..., pattern=PERIOD_PATTERN)
    change: float
    change_percent: float | None


class YearlySummary(BaseModel):
    """A calendar year rolled up from its twelve monthly summaries."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    year: int = Field(..., ge=1, le=9999)
    total: float
    cost: float | None = None
    expenses: float | None = None
    gross_profit: float | None = None
    operating_profit: float | None = None
    monthly: list[PeriodSummary]


class KpiProgress(BaseModel):
    """Share of KPI metrics that reached their standard target."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    total: int = Field(..., ge=0)
    completed: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0)
