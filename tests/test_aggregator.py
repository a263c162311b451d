"""Tests for the aggregator and the top-N grouper."""

from datetime import date
from decimal import Decimal

from daybook.analytics import (
    profit_margin,
    split_by_type,
    summarize,
    top_by_name,
    top_by_type,
    top_expense_categories,
    top_income_sources,
)
from daybook.models import Summary, TransactionType

from tests.conftest import make_txn


class TestSummarize:
    """Tests for income/expense/profit totals."""

    def test_empty_collection(self):
        """An empty collection gives an all-zero summary."""
        summary = summarize([])
        assert summary == Summary(income=Decimal("0"), expense=Decimal("0"), profit=Decimal("0"))
        assert summary.is_empty

    def test_income_only(self):
        txns = [make_txn("Rofik", 120), make_txn("Online Sale", 350), make_txn("Store Sales", 380)]
        summary = summarize(txns)
        assert summary.income == Decimal("850")
        assert summary.expense == 0
        assert summary.profit == Decimal("850")

    def test_profit_is_income_minus_expense(self, march_transactions):
        summary = summarize(march_transactions)
        assert summary.income == Decimal("1090")
        assert summary.expense == Decimal("500")
        assert summary.profit == summary.income - summary.expense

    def test_profit_may_be_negative(self):
        summary = summarize([make_txn("Sale", 50), make_txn("Rent", 250, "expense")])
        assert summary.profit == Decimal("-200")

    def test_cents_are_exact(self):
        txns = [make_txn("A", "0.10"), make_txn("B", "0.20")]
        assert summarize(txns).income == Decimal("0.30")

    def test_accepts_generator(self, march_transactions):
        summary = summarize(txn for txn in march_transactions if txn.date.day == 1)
        assert summary.income == Decimal("470")
        assert summary.expense == Decimal("250")


class TestSplitByType:
    def test_keeps_order(self, march_transactions):
        incomes, expenses = split_by_type(march_transactions)
        assert [txn.name for txn in incomes] == ["Rofik", "Online Sale", "Online Sale"]
        assert [txn.name for txn in expenses] == ["Rent", "Supplies", "Electricity"]


class TestProfitMargin:
    """Tests for the yearly profit margin."""

    def test_zero_income_gives_zero(self):
        assert profit_margin(Summary(expense=Decimal("100"), profit=Decimal("-100"))) == 0

    def test_empty_summary_gives_zero(self):
        assert profit_margin(Summary()) == 0

    def test_margin_is_rounded_to_two_places(self):
        summary = Summary(income=Decimal("3"), expense=Decimal("2"), profit=Decimal("1"))
        assert profit_margin(summary) == Decimal("33.33")

    def test_negative_margin(self):
        summary = Summary(income=Decimal("100"), expense=Decimal("150"), profit=Decimal("-50"))
        assert profit_margin(summary) == Decimal("-50.00")


class TestTopByName:
    """Tests for the grouped "top N" lists."""

    def test_groups_then_sorts(self):
        txns = [make_txn("A", 100), make_txn("B", 300), make_txn("A", 50)]
        top = top_by_name(txns, 2)
        assert [(entry.name, entry.amount) for entry in top] == [
            ("B", Decimal("300")),
            ("A", Decimal("150")),
        ]

    def test_percentages_of_total(self):
        txns = [make_txn("A", 100), make_txn("B", 300)]
        top = top_by_name(txns, 2)
        assert top[0].percentage == Decimal("75.00")
        assert top[1].percentage == Decimal("25.00")

    def test_percentage_uses_full_total_not_top_n(self):
        txns = [make_txn("A", 50), make_txn("B", 30), make_txn("C", 20)]
        top = top_by_name(txns, 1)
        assert len(top) == 1
        assert top[0].percentage == Decimal("50.00")

    def test_ties_keep_first_seen_order(self):
        txns = [make_txn("Second", 10), make_txn("First", 20), make_txn("Third", 10)]
        top = top_by_name(txns, 3)
        assert [entry.name for entry in top] == ["First", "Second", "Third"]

    def test_names_are_case_sensitive(self):
        txns = [make_txn("rent", 10), make_txn("Rent", 10)]
        assert len(top_by_name(txns, 5)) == 2

    def test_fewer_groups_than_n(self):
        assert len(top_by_name([make_txn("A", 1)], 4)) == 1

    def test_empty_and_non_positive_n(self):
        assert top_by_name([], 3) == []
        assert top_by_name([make_txn("A", 1)], 0) == []

    def test_zero_total_gives_zero_percentage(self):
        top = top_by_name([make_txn("A", 0)], 1)
        assert top[0].percentage == 0

    def test_top_by_type_ignores_other_type(self, march_transactions):
        top = top_by_type(march_transactions, TransactionType.EXPENSE, 10)
        assert [entry.name for entry in top] == ["Rent", "Supplies", "Electricity"]

    def test_default_list_lengths(self):
        txns = [make_txn(f"Source {i}", 10 + i, on_date=date(2024, 3, 1)) for i in range(6)]
        txns += [make_txn(f"Cost {i}", 10 + i, "expense") for i in range(6)]
        assert len(top_income_sources(txns)) == 3
        assert len(top_expense_categories(txns)) == 4
