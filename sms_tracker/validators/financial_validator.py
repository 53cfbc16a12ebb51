"""
Financial Validator Module
Validates extracted transaction records for completeness before they are
accepted into a session.
"""

import logging
import re
from typing import Optional

from ..extractors.financial_rules import is_valid_category, is_valid_type
from ..extractors.regex_extractor import TransactionRecord

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("date", "amount", "currency", "type")

ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
CURRENCY_CODE_PATTERN = re.compile(r'^[A-Z]{3}$')


class ExtractionError(Exception):
    """Base exception for per-message parsing failures."""
    pass


class EmptyInput(ExtractionError):
    """The message was empty or whitespace only."""

    def __init__(self, message: str = "Please paste an SMS message"):
        super().__init__(message)


class DuplicateMessage(ExtractionError):
    """The message was already parsed in this session."""

    def __init__(self, message: str = "This message has already been parsed"):
        super().__init__(message)


class IncompleteExtraction(ExtractionError):
    """One or more required fields could not be extracted."""

    def __init__(self, missing_fields: Optional[list[str]] = None):
        self.missing_fields = list(missing_fields or [])
        detail = "Could not extract all required fields from SMS"
        if self.missing_fields:
            detail = f"{detail} (missing: {', '.join(self.missing_fields)})"
        super().__init__(detail)


class TransactionValidator:
    """Validates transaction records."""

    def __init__(self):
        self.validation_stats = {
            "total_validated": 0,
            "valid": 0,
            "invalid": 0,
        }

    def find_missing_fields(self, record: TransactionRecord) -> list[str]:
        """
        List the required fields that are empty.

        An amount of 0 counts as missing.
        """
        return [field for field in REQUIRED_FIELDS if not getattr(record, field, None)]

    def validate(self, record: TransactionRecord) -> TransactionRecord:
        """
        Validate a single record.

        Fills the optional card_last4 and category defaults, then checks
        the required fields.

        Args:
            record: TransactionRecord to validate

        Returns:
            The same record, with defaults applied

        Raises:
            IncompleteExtraction: If any of date, amount, currency or type is missing
        """
        self.validation_stats["total_validated"] += 1

        record.card_last4 = record.card_last4 or ''
        record.category = record.category or 'Other'

        missing = self.find_missing_fields(record)
        if missing:
            self.validation_stats["invalid"] += 1
            logger.warning(f"Incomplete extraction, missing {missing}: {record}")
            raise IncompleteExtraction(missing)

        self._check_shape(record)

        self.validation_stats["valid"] += 1
        return record

    def _check_shape(self, record: TransactionRecord):
        """Log records whose populated fields look unusual; never rejects."""
        if not ISO_DATE_PATTERN.match(record.date):
            logger.warning(f"Date not in YYYY-MM-DD form: {record.date}")

        if not CURRENCY_CODE_PATTERN.match(record.currency):
            logger.warning(f"Unexpected currency code: {record.currency}")

        if not is_valid_type(record.type):
            logger.warning(f"Unexpected transaction type: {record.type}")

        if not is_valid_category(record.category):
            logger.warning(f"Unexpected category: {record.category}")

    def get_stats(self) -> dict:
        """Get validation statistics."""
        return self.validation_stats.copy()

    def reset_stats(self):
        """Reset validation statistics."""
        self.validation_stats = {
            "total_validated": 0,
            "valid": 0,
            "invalid": 0,
        }


def validate_record(record: TransactionRecord) -> TransactionRecord:
    """
    Convenience function to validate one record.

    Raises:
        IncompleteExtraction: If required fields are missing
    """
    return TransactionValidator().validate(record)
