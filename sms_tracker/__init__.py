"""
SMS Expense Tracker - turns bank SMS notifications into transaction records.
"""

from .extractors import TransactionRecord
from .main import (
    Deduplicator,
    SMSMessageParser,
    TransactionSummarizer,
    parse_message
)
from .validators import (
    ExtractionError,
    EmptyInput,
    DuplicateMessage,
    IncompleteExtraction
)

__version__ = "1.0.0"

__all__ = [
    'TransactionRecord',
    'Deduplicator',
    'SMSMessageParser',
    'TransactionSummarizer',
    'parse_message',
    'ExtractionError',
    'EmptyInput',
    'DuplicateMessage',
    'IncompleteExtraction',
]
