"""
Report Models

Plain result shapes returned by the analytics core. They carry no
behaviour beyond a few display helpers; the UI renders them as-is.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from daybook.models.transaction import Transaction


ZERO = Decimal("0")


class Summary(BaseModel):
    """Income, expense and profit for one scope (a day, a month, a year...)."""

    income: Decimal = Field(default=ZERO)
    expense: Decimal = Field(default=ZERO)
    profit: Decimal = Field(
        default=ZERO,
        description="income - expense, may be negative"
    )

    @property
    def is_empty(self) -> bool:
        return self.income == 0 and self.expense == 0


class RankedEntry(BaseModel):
    """One row of a "top N" list."""

    name: str
    amount: Decimal
    percentage: Decimal = Field(
        default=ZERO,
        description="Share of the type's total, in percent"
    )


class DayBucket(Summary):
    """Summary for a single day of a month."""

    day: int = Field(..., ge=1, le=31)
    date: dt.date


class MonthBucket(Summary):
    """Summary for a single month of a year."""

    month: int = Field(..., ge=1, le=12)
    label: str = Field(..., description="Short month name, e.g. 'Jan'")


class DailyReport(BaseModel):
    """Everything the Today / Daily View pages show."""

    date: dt.date
    summary: Summary
    incomes: list[Transaction] = Field(default_factory=list)
    expenses: list[Transaction] = Field(default_factory=list)


class MonthlyReport(BaseModel):
    """
    Month detail report.

    `daily_breakdown` is sparse: only days with some income or
    expense appear.
    """

    month: int = Field(..., ge=1, le=12)
    year: int
    summary: Summary
    daily_breakdown: list[DayBucket] = Field(default_factory=list)
    top_income: list[RankedEntry] = Field(default_factory=list)
    top_expense: list[RankedEntry] = Field(default_factory=list)


class YearlyReport(BaseModel):
    """
    Year overview for the admin dashboard.

    `monthly_breakdown` is dense: always twelve buckets, January first.
    """

    year: int
    summary: Summary
    profit_margin: Decimal = Field(default=ZERO)
    monthly_breakdown: list[MonthBucket] = Field(default_factory=list)


class Page(BaseModel):
    """One page of the admin transaction table."""

    items: list[Transaction] = Field(default_factory=list)
    page_number: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(
        ...,
        ge=1,
        description="Never below 1, so an empty table still shows 'page 1 of 1'"
    )

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages
