"""
Tests for transaction grouping and monthly totals
"""

import pytest

from sms_tracker.extractors.regex_extractor import TransactionRecord
from sms_tracker.main import TransactionSummarizer


@pytest.fixture
def records():
    return [
        TransactionRecord(date="2026-02-16", amount=15.75, merchant="OOTTUPURA RESTA"),
        TransactionRecord(date="2026-02-05", amount=200.00, merchant="ATM Withdrawal"),
        TransactionRecord(date="2026-02-10", amount=2100.00, transaction_type="Credit", merchant="Bank Credit"),
        TransactionRecord(date="2026-03-01", amount=55.20, merchant="carrefour mall", category="Groceries"),
    ]


class TestSummarize:

    def test_whole_session(self, records):
        summary = TransactionSummarizer.summarize(records)

        assert summary == {
            "month": None,
            "transaction_count": 4,
            "total_debit": 270.95,
            "total_credit": 2100.00,
            "net_total": 1829.05,
        }

    def test_single_month(self, records):
        summary = TransactionSummarizer.summarize(records, "2026-02")

        assert summary["transaction_count"] == 3
        assert summary["total_debit"] == 215.75
        assert summary["net_total"] == 1884.25

    def test_empty(self):
        summary = TransactionSummarizer.summarize([], "2026-01")
        assert summary["transaction_count"] == 0
        assert summary["net_total"] == 0.0


class TestGrouping:

    def test_group_by_month(self, records):
        grouped = TransactionSummarizer.group_by_month(records)

        assert sorted(grouped.keys()) == ["2026-02", "2026-03"]
        assert len(grouped["2026-02"]) == 3

    def test_group_by_category_counts_debits_only(self, records):
        totals = TransactionSummarizer.group_by_category(records)

        assert totals == {"Other": 215.75, "Groceries": 55.20}
