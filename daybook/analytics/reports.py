"""
Report Builder

Builds the daily, monthly and yearly views by slicing the transaction
list into time buckets and running the aggregator on each slice.

Period membership is decided on the calendar date only. Transactions
already carry a plain `date` (the model strips any time of day), so a
day, month or year match is a simple field comparison.

NOTE: the two breakdowns are shaped differently.
- Month detail (`build_monthly_report`) is SPARSE: only days that have
  some income or expense are listed.
- Year overview (`build_yearly_report`) is DENSE: always 12 buckets,
  zero-filled.
"""

import calendar
import datetime as dt
from typing import Iterable

from daybook.analytics.aggregator import profit_margin, split_by_type, summarize
from daybook.analytics.grouper import (
    DEFAULT_TOP_EXPENSE,
    DEFAULT_TOP_INCOME,
    top_expense_categories,
    top_income_sources,
)
from daybook.models.report import (
    DailyReport,
    DayBucket,
    MonthBucket,
    MonthlyReport,
    YearlyReport,
)
from daybook.models.transaction import Transaction


# =============================================================================
# PERIOD PREDICATES
# =============================================================================

def on_day(transaction: Transaction, day: dt.date) -> bool:
    return transaction.date == day


def in_month(transaction: Transaction, month: int, year: int) -> bool:
    return transaction.date.month == month and transaction.date.year == year


def in_year(transaction: Transaction, year: int) -> bool:
    return transaction.date.year == year


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")


# =============================================================================
# REPORTS
# =============================================================================

def build_daily_report(
    transactions: Iterable[Transaction],
    day: dt.date,
) -> DailyReport:
    """Summary plus the day's incomes and expenses, in entry order."""
    todays = [txn for txn in transactions if on_day(txn, day)]
    incomes, expenses = split_by_type(todays)
    return DailyReport(
        date=day,
        summary=summarize(todays),
        incomes=incomes,
        expenses=expenses,
    )


def build_monthly_report(
    transactions: Iterable[Transaction],
    month: int,
    year: int,
    top_income_count: int = DEFAULT_TOP_INCOME,
    top_expense_count: int = DEFAULT_TOP_EXPENSE,
) -> MonthlyReport:
    """
    Month detail: overall summary, sparse per-day breakdown and the
    top income sources / expense categories.

    Raises:
        ValueError: If month is not in 1..12
    """
    _check_month(month)
    monthly = [txn for txn in transactions if in_month(txn, month, year)]

    _, days_in_month = calendar.monthrange(year, month)
    breakdown = []
    for day_number in range(1, days_in_month + 1):
        day = dt.date(year, month, day_number)
        bucket = summarize(txn for txn in monthly if on_day(txn, day))
        if bucket.income == 0 and bucket.expense == 0:
            continue
        breakdown.append(DayBucket(day=day_number, date=day, **bucket.model_dump()))

    return MonthlyReport(
        month=month,
        year=year,
        summary=summarize(monthly),
        daily_breakdown=breakdown,
        top_income=top_income_sources(monthly, top_income_count),
        top_expense=top_expense_categories(monthly, top_expense_count),
    )


def build_yearly_report(
    transactions: Iterable[Transaction],
    year: int,
) -> YearlyReport:
    """Year overview with a dense twelve-month breakdown and profit margin."""
    yearly = [txn for txn in transactions if in_year(txn, year)]

    breakdown = []
    for month in range(1, 13):
        bucket = summarize(txn for txn in yearly if txn.date.month == month)
        breakdown.append(
            MonthBucket(month=month, label=calendar.month_abbr[month], **bucket.model_dump())
        )

    summary = summarize(yearly)
    return YearlyReport(
        year=year,
        summary=summary,
        profit_margin=profit_margin(summary),
        monthly_breakdown=breakdown,
    )
