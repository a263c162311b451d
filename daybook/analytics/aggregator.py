"""
Aggregator

DESIGN DECISION: Aggregation is a pure function of the list it is given.
There is exactly one implementation of income/expense/profit, shared by
every storage backend and every page. Callers decide which transactions
are in scope (a day, a month, a filtered range) and pass them in.

Amounts are trusted here. They were validated when the transaction
model was built, so there is no re-checking of NaN or negative values.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from daybook.models.report import ZERO, Summary
from daybook.models.transaction import Transaction, TransactionType


HUNDRED = Decimal("100")
CENTS = Decimal("0.01")


def split_by_type(
    transactions: Iterable[Transaction],
) -> tuple[list[Transaction], list[Transaction]]:
    """Partition into (incomes, expenses), keeping the original order."""
    incomes: list[Transaction] = []
    expenses: list[Transaction] = []
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            incomes.append(txn)
        else:
            expenses.append(txn)
    return incomes, expenses


def total_amount(transactions: Iterable[Transaction]) -> Decimal:
    return sum((txn.amount for txn in transactions), ZERO)


def summarize(transactions: Iterable[Transaction]) -> Summary:
    """
    Compute income, expense and profit over a collection.

    An empty collection gives an all-zero summary. Profit may be negative.
    """
    incomes, expenses = split_by_type(transactions)
    income = total_amount(incomes)
    expense = total_amount(expenses)
    return Summary(income=income, expense=expense, profit=income - expense)


def profit_margin(summary: Summary) -> Decimal:
    """
    Profit as a percentage of income, rounded to two places.

    Zero when there is no income.
    """
    if summary.income <= 0:
        return ZERO
    margin = summary.profit / summary.income * HUNDRED
    return margin.quantize(CENTS, rounding=ROUND_HALF_UP)
