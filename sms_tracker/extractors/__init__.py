"""
Extractors Module - SMS field extraction, template routing and categorization.
"""

from .regex_extractor import (
    TransactionRecord,
    parse_date,
    parse_amount_and_currency,
    extract_merchant,
    extract_card_last4,
    clean_merchant
)

from .financial_rules import (
    TransactionType,
    Category,
    CATEGORY_RULES,
    detect_category,
    detect_transaction_type
)

from .template_router import (
    MessageTemplate,
    ExtractionMode,
    TemplateRouter,
    GenericExtractor,
    get_extractor
)

__all__ = [
    'TransactionRecord',
    'parse_date',
    'parse_amount_and_currency',
    'extract_merchant',
    'extract_card_last4',
    'clean_merchant',
    'TransactionType',
    'Category',
    'CATEGORY_RULES',
    'detect_category',
    'detect_transaction_type',
    'MessageTemplate',
    'ExtractionMode',
    'TemplateRouter',
    'GenericExtractor',
    'get_extractor',
]
