"""
SMS Expense Tracker - Main Pipeline
Orchestrates parsing, deduplication and validation of bank SMS messages,
and summarizes the resulting transactions.
"""

import logging
import sys
import threading
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional

from .config import config
from .extractors.financial_rules import TransactionType
from .extractors.regex_extractor import TransactionRecord
from .extractors.template_router import get_extractor
from .logging_config import setup_logging
from .validators.financial_validator import (
    DuplicateMessage,
    EmptyInput,
    ExtractionError,
    IncompleteExtraction,
    TransactionValidator,
)

logger = logging.getLogger(__name__)


class Deduplicator:
    """
    Session-scoped set of messages that were already parsed.

    Append-only and never pruned. All access goes through `lock` so that
    a check followed by an add can be made atomic by the caller.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self._messages: list[str] = []
        self._index: set[str] = set()

    def seen(self, message: str) -> bool:
        """Exact string match against previously recorded messages."""
        with self.lock:
            return message in self._index

    def add(self, message: str):
        """Record a message."""
        with self.lock:
            if message not in self._index:
                self._messages.append(message)
                self._index.add(message)

    def check_and_add(self, message: str) -> bool:
        """
        Record a message unless it was already seen.

        Returns:
            True if the message was new and is now recorded, False if it was a duplicate
        """
        with self.lock:
            if message in self._index:
                return False
            self._messages.append(message)
            self._index.add(message)
            return True

    def messages(self) -> list[str]:
        """Snapshot of recorded messages in arrival order."""
        with self.lock:
            return list(self._messages)

    def clear(self):
        """Forget every recorded message (ends the session)."""
        with self.lock:
            self._messages.clear()
            self._index.clear()

    def __contains__(self, message: str) -> bool:
        return self.seen(message)

    def __len__(self) -> int:
        with self.lock:
            return len(self._messages)


class SMSMessageParser:
    """Main orchestrator for the SMS parsing pipeline of one session."""

    def __init__(self, mode: Optional[str] = None, deduplicator: Optional[Deduplicator] = None):
        """
        Initialize parser.

        Args:
            mode: Extraction mode name ("template" or "generic");
                  defaults to config.EXTRACTION_MODE
            deduplicator: Shared seen-message set; a new one is created if omitted
        """
        self.mode = config.get_extraction_mode(mode)
        self.extractor = get_extractor(self.mode)
        self.deduplicator = deduplicator if deduplicator is not None else Deduplicator()
        self.validator = TransactionValidator()
        self.records: list[TransactionRecord] = []
        self.stats = {
            "messages_received": 0,
            "parsed": 0,
            "duplicates": 0,
            "empty": 0,
            "incomplete": 0
        }

    def parse_message(self, raw: str) -> TransactionRecord:
        """
        Parse one SMS message into a transaction record.

        Args:
            raw: SMS text as received

        Returns:
            Validated TransactionRecord

        Raises:
            EmptyInput: If the trimmed message is empty
            DuplicateMessage: If the message was already parsed in this session
            IncompleteExtraction: If date, amount, currency or type could not be extracted
        """
        message = (raw or '').strip()

        with self.deduplicator.lock:
            self.stats["messages_received"] += 1

            if not message:
                self.stats["empty"] += 1
                logger.warning("Empty message rejected")
                raise EmptyInput()

            if self.deduplicator.seen(message):
                self.stats["duplicates"] += 1
                logger.warning(f"Duplicate message rejected: {message[:50]}...")
                raise DuplicateMessage()

            record = self.extractor.extract(message)

            try:
                record = self.validator.validate(record)
            except IncompleteExtraction:
                self.stats["incomplete"] += 1
                raise

            if not self.deduplicator.check_and_add(message):
                self.stats["duplicates"] += 1
                raise DuplicateMessage()

            self.records.append(record)
            self.stats["parsed"] += 1

        logger.info(
            f"Parsed: {record.date} | {record.type} | {record.amount:.2f} {record.currency} | "
            f"{record.merchant[:30]}"
        )
        return record

    def parse_messages(
        self,
        raws: Iterable[str]
    ) -> tuple[list[TransactionRecord], list[tuple[str, ExtractionError]]]:
        """
        Parse a batch of messages. A failing message never aborts the batch.

        Returns:
            (records, errors) where errors holds (message, error) pairs
        """
        records = []
        errors = []

        for raw in raws:
            try:
                records.append(self.parse_message(raw))
            except ExtractionError as e:
                errors.append((raw, e))

        logger.info(f"Batch complete: {len(records)} parsed, {len(errors)} failed")
        return records, errors

    def get_records(self) -> list[TransactionRecord]:
        """Records accepted in this session."""
        with self.deduplicator.lock:
            return list(self.records)

    def reset(self):
        """Start a new session: forget seen messages and records."""
        with self.deduplicator.lock:
            self.deduplicator.clear()
            self.records.clear()
            for key in self.stats:
                self.stats[key] = 0
            self.validator.reset_stats()
        logger.info("Session reset")

    def get_stats(self) -> dict:
        """Get parsing statistics."""
        with self.deduplicator.lock:
            return self.stats.copy()


class TransactionSummarizer:
    """Groups and totals parsed transactions."""

    @staticmethod
    def filter_by_month(records: list[TransactionRecord], month: Optional[str]) -> list[TransactionRecord]:
        """
        Keep records whose date falls in a month.

        Args:
            records: List of records
            month: Month (YYYY-MM), or None to keep everything
        """
        if not month:
            return list(records)
        return [record for record in records if record.date.startswith(month)]

    @staticmethod
    def group_by_month(records: list[TransactionRecord]) -> dict[str, list[TransactionRecord]]:
        """Group records by month (YYYY-MM)."""
        grouped = defaultdict(list)

        for record in records:
            if record.date:
                grouped[record.date[:7]].append(record)

        logger.info(f"Grouped {len(records)} transactions into {len(grouped)} months")
        return dict(grouped)

    @staticmethod
    def group_by_category(records: list[TransactionRecord]) -> dict[str, float]:
        """Total debit spending per category."""
        totals = defaultdict(float)

        for record in records:
            if record.type == TransactionType.DEBIT.value:
                totals[record.category] += record.amount

        return {category: round(total, 2) for category, total in totals.items()}

    @staticmethod
    def summarize(records: list[TransactionRecord], month: Optional[str] = None) -> dict:
        """
        Summarize debits, credits and the net total.

        Args:
            records: List of records
            month: Optional month (YYYY-MM) to restrict the summary to

        Returns:
            Dict with month, transaction_count, total_debit, total_credit, net_total
        """
        selected = TransactionSummarizer.filter_by_month(records, month)

        total_debit = 0.0
        total_credit = 0.0

        for record in selected:
            if record.type == TransactionType.DEBIT.value:
                total_debit += record.amount
            else:
                total_credit += record.amount

        return {
            "month": month,
            "transaction_count": len(selected),
            "total_debit": round(total_debit, 2),
            "total_credit": round(total_credit, 2),
            "net_total": round(total_credit - total_debit, 2)
        }


def parse_message(raw: str) -> TransactionRecord:
    """
    Convenience function to parse one message with a fresh session.

    Each call starts its own session, so this never raises DuplicateMessage.
    Use an SMSMessageParser to reject repeated messages.

    Args:
        raw: SMS text

    Returns:
        Validated TransactionRecord

    Raises:
        EmptyInput: If the trimmed message is empty
        IncompleteExtraction: If a required field could not be extracted
    """
    parser = SMSMessageParser()
    return parser.parse_message(raw)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Command line entry point.

    Parses each argument as one message, or each non-empty stdin line
    when no arguments are given, and prints the records as JSON.
    """
    setup_logging()

    messages = argv if argv is not None else sys.argv[1:]
    if not messages:
        messages = [line for line in sys.stdin.read().splitlines() if line.strip()]

    if not messages:
        print("\n❌ Error: No SMS messages provided")
        print("Usage: python -m sms_tracker.main \"<sms text>\" [\"<sms text>\" ...]")
        return 1

    parser = SMSMessageParser()
    records, errors = parser.parse_messages(messages)

    for record in records:
        print(record.to_json())

    for message, error in errors:
        print(f"❌ {error}: {message[:60]}")

    summary = TransactionSummarizer.summarize(records)
    logger.info(
        f"Parsed {len(records)}/{len(messages)} messages "
        f"(debit {summary['total_debit']:.2f}, credit {summary['total_credit']:.2f}) "
        f"at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
    )

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
