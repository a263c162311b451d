"""
Grouper - "top N" lists for income sources and expense categories.

Names are matched exactly (case-sensitive, no trimming beyond what the
model already did). Ties keep first-encountered order: groups are built
in insertion order and Python's sort is stable, also with reverse=True.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from daybook.analytics.aggregator import CENTS, HUNDRED, split_by_type
from daybook.models.report import ZERO, RankedEntry
from daybook.models.transaction import Transaction, TransactionType


DEFAULT_TOP_INCOME = 3
DEFAULT_TOP_EXPENSE = 4


def top_by_name(transactions: Iterable[Transaction], n: int) -> list[RankedEntry]:
    """
    Group by name, sum amounts and return the `n` largest groups.

    The collection is expected to hold a single transaction type; use
    `top_by_type` to partition first. Percentages are shares of the
    collection's total.
    """
    if n <= 0:
        return []

    totals: dict[str, Decimal] = {}
    for txn in transactions:
        totals[txn.name] = totals.get(txn.name, ZERO) + txn.amount

    grand_total = sum(totals.values(), ZERO)
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)

    entries = []
    for name, amount in ranked[:n]:
        if grand_total > 0:
            percentage = (amount / grand_total * HUNDRED).quantize(
                CENTS, rounding=ROUND_HALF_UP
            )
        else:
            percentage = ZERO
        entries.append(RankedEntry(name=name, amount=amount, percentage=percentage))
    return entries


def top_by_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
    n: int,
) -> list[RankedEntry]:
    """Rank names within one transaction type only."""
    incomes, expenses = split_by_type(transactions)
    selected = incomes if transaction_type == TransactionType.INCOME else expenses
    return top_by_name(selected, n)


def top_income_sources(
    transactions: Iterable[Transaction],
    n: int = DEFAULT_TOP_INCOME,
) -> list[RankedEntry]:
    return top_by_type(transactions, TransactionType.INCOME, n)


def top_expense_categories(
    transactions: Iterable[Transaction],
    n: int = DEFAULT_TOP_EXPENSE,
) -> list[RankedEntry]:
    return top_by_type(transactions, TransactionType.EXPENSE, n)
