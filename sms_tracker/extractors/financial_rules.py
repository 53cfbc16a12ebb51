"""
Financial Rules Module
Defines credit/debit keyword detection and merchant category rules.
"""

from enum import Enum
from types import MappingProxyType
import logging

logger = logging.getLogger(__name__)


class TransactionType(Enum):
    """Transaction type enumeration."""
    CREDIT = "Credit"
    DEBIT = "Debit"


class Category(Enum):
    """Spending category enumeration."""
    GROCERIES = "Groceries"
    SHOPPING = "Shopping"
    FUEL = "Fuel"
    FOOD = "Food"
    OTHER = "Other"


# Keyword substrings per category. Order matters: earlier categories win.
CATEGORY_RULES = MappingProxyType({
    Category.GROCERIES.value: ('carrefour', 'lulu', 'union', 'safeway', 'choithrams', 'spinneys'),
    Category.SHOPPING.value: ('amazon', 'noon', 'shein', 'h&m', 'zara', 'forever 21'),
    Category.FUEL.value: ('adnoc', 'enoc', 'shell', 'bp'),
    Category.FOOD.value: ('talabat', 'deliveroo', 'uber eats', 'zomato', 'restaurant'),
})

# Checked in order: any credit keyword wins over every debit keyword
CREDIT_KEYWORDS = ('credited', 'received', 'transfered', 'transferred', 'refund', 'deposited')
DEBIT_KEYWORDS = ('spent', 'purchase', 'debited', 'charged', 'withdrawn', 'transfer out')


def detect_category(merchant: str) -> str:
    """
    Map a merchant name to a spending category.

    Lower-cases the merchant and tests substring containment against each
    category's keywords in table order. First hit wins.

    Args:
        merchant: Merchant name (may be empty)

    Returns:
        Category name, "Other" when nothing matches
    """
    if not merchant:
        return Category.OTHER.value

    merchant_lower = merchant.lower()

    for category, keywords in CATEGORY_RULES.items():
        for keyword in keywords:
            if keyword in merchant_lower:
                logger.debug(f"Category '{category}' matched keyword '{keyword}' in '{merchant}'")
                return category

    return Category.OTHER.value


def detect_transaction_type(message: str) -> str:
    """
    Decide whether a message describes a credit or a debit.

    Args:
        message: Raw SMS text

    Returns:
        "Credit" or "Debit" (the default when no keyword is present)
    """
    message_lower = (message or '').lower()

    for keyword in CREDIT_KEYWORDS:
        if keyword in message_lower:
            return TransactionType.CREDIT.value

    for keyword in DEBIT_KEYWORDS:
        if keyword in message_lower:
            return TransactionType.DEBIT.value

    return TransactionType.DEBIT.value


def is_valid_type(value: str) -> bool:
    """Check that a type string is one of the emitted enum values."""
    return value in {t.value for t in TransactionType}


def is_valid_category(value: str) -> bool:
    """Check that a category string is one of the emitted enum values."""
    return value in {c.value for c in Category}
