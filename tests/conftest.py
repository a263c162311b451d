"""Shared fixtures for the Daybook tests."""

from datetime import date
from decimal import Decimal

import pytest

from daybook.models import Transaction, TransactionType


def make_txn(name, amount, transaction_type="income", on_date=date(2024, 3, 15), **kwargs):
    return Transaction(
        name=name,
        amount=Decimal(str(amount)),
        type=TransactionType(transaction_type),
        date=on_date,
        **kwargs,
    )


@pytest.fixture
def march_transactions():
    """A small month: two busy days and one quiet day in March 2024."""
    return [
        make_txn("Rofik", "120", "income", date(2024, 3, 1)),
        make_txn("Online Sale", "350", "income", date(2024, 3, 1)),
        make_txn("Rent", "250", "expense", date(2024, 3, 1)),
        make_txn("Online Sale", "620", "income", date(2024, 3, 10)),
        make_txn("Supplies", "150", "expense", date(2024, 3, 10)),
        make_txn("Electricity", "100", "expense", date(2024, 3, 20)),
    ]
