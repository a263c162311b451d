"""
Admin table helpers: date-range filter, newest-first sort, pagination.
"""

import datetime as dt
import math
from typing import Iterable, Optional, Sequence

from daybook.models.report import Page
from daybook.models.transaction import Transaction


DEFAULT_PAGE_SIZE = 10


def filter_by_range(
    transactions: Iterable[Transaction],
    start: Optional[dt.date] = None,
    end: Optional[dt.date] = None,
) -> list[Transaction]:
    """
    Keep transactions whose day falls within [start, end].

    Both bounds are inclusive. A missing bound is open-ended; with no
    bounds at all the input comes back unchanged (as a new list).
    """
    if start is None and end is None:
        return list(transactions)

    selected = []
    for txn in transactions:
        if start is not None and txn.date < start:
            continue
        if end is not None and txn.date > end:
            continue
        selected.append(txn)
    return selected


def sort_by_date_desc(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Most recent day first. Same-day entries keep their relative order."""
    return sorted(transactions, key=lambda txn: txn.date, reverse=True)


def paginate(
    items: Sequence[Transaction],
    page_size: int = DEFAULT_PAGE_SIZE,
    page_number: int = 1,
) -> Page:
    """
    Slice an already sorted sequence into 1-based pages.

    A page past the end is returned empty rather than raising.

    Raises:
        ValueError: If page_size or page_number is below 1
    """
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    if page_number < 1:
        raise ValueError(f"page_number must be at least 1, got {page_number}")

    total_items = len(items)
    offset = (page_number - 1) * page_size
    return Page(
        items=list(items[offset:offset + page_size]),
        page_number=page_number,
        page_size=page_size,
        total_items=total_items,
        total_pages=max(math.ceil(total_items / page_size), 1),
    )
