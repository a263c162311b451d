"""
CSV export for the admin table.

Rows are joined with plain commas. Names containing a comma are NOT
quoted, so such a row will have an extra column when read back.
"""

from typing import Iterable

from daybook.models.transaction import Transaction


CSV_HEADER = ("Date", "Name", "Type", "Amount")
CSV_FILENAME = "transactions.csv"
CSV_MIME_TYPE = "text/csv;charset=utf-8"


def to_csv_row(transaction: Transaction) -> str:
    return ",".join([
        transaction.date.isoformat(),
        transaction.name,
        transaction.type.value,
        str(transaction.amount),
    ])


def to_csv(transactions: Iterable[Transaction]) -> str:
    """Header line plus one line per transaction, in the given order."""
    lines = [",".join(CSV_HEADER)]
    lines.extend(to_csv_row(txn) for txn in transactions)
    return "\n".join(lines)
