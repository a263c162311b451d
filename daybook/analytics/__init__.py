"""
Analytics package - the pure aggregation core.

Nothing in here does I/O. Every function takes an already fetched
list of transactions and returns plain models.
"""

from daybook.analytics.aggregator import (
    profit_margin,
    split_by_type,
    summarize,
    total_amount,
)
from daybook.analytics.export import CSV_FILENAME, CSV_HEADER, to_csv
from daybook.analytics.grouper import (
    top_by_name,
    top_by_type,
    top_expense_categories,
    top_income_sources,
)
from daybook.analytics.pagination import (
    DEFAULT_PAGE_SIZE,
    filter_by_range,
    paginate,
    sort_by_date_desc,
)
from daybook.analytics.reports import (
    build_daily_report,
    build_monthly_report,
    build_yearly_report,
    in_month,
    in_year,
    on_day,
)

__all__ = [
    "CSV_FILENAME",
    "CSV_HEADER",
    "DEFAULT_PAGE_SIZE",
    "build_daily_report",
    "build_monthly_report",
    "build_yearly_report",
    "filter_by_range",
    "in_month",
    "in_year",
    "on_day",
    "paginate",
    "profit_margin",
    "sort_by_date_desc",
    "split_by_type",
    "summarize",
    "to_csv",
    "top_by_name",
    "top_by_type",
    "top_expense_categories",
    "top_income_sources",
    "total_amount",
]
