"""
Validators Module - Transaction record validation.
"""

from .financial_validator import (
    ExtractionError,
    EmptyInput,
    DuplicateMessage,
    IncompleteExtraction,
    TransactionValidator,
    validate_record
)

__all__ = [
    'ExtractionError',
    'EmptyInput',
    'DuplicateMessage',
    'IncompleteExtraction',
    'TransactionValidator',
    'validate_record',
]
