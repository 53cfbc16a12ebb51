"""
Regex Extractor Module
Field-level extractors shared by the SMS parsing strategies: dates, amounts
with currency, merchants and card suffixes, plus the TransactionRecord type
they fill in.
"""

import re
import json
import logging
from datetime import date

from .financial_rules import Category, TransactionType

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "AED"

# Field order is a compatibility contract with downstream storage
RECORD_FIELDS = ("date", "amount", "currency", "type", "merchant", "card_last4", "category", "raw")

MONTH_NAMES = {
    'jan': '01', 'feb': '02', 'mar': '03', 'apr': '04', 'may': '05', 'jun': '06',
    'jul': '07', 'aug': '08', 'sep': '09', 'oct': '10', 'nov': '11', 'dec': '12',
}

# Date patterns, tried in order:
# - DD-MM-YYYY or DD/MM/YYYY (e.g., 17/02/2026)
# - DD Mon YYYY (e.g., 15 Feb 2026)
# - Mon DD YYYY (e.g., Feb 16 2026)
NUMERIC_DATE_PATTERN = re.compile(r'(\d{1,2})[-/](\d{1,2})[-/](\d{4})')
DAY_MONTH_PATTERN = re.compile(r'(\d{1,2})\s+([a-z]{3})\s+(\d{4})', re.IGNORECASE)
MONTH_DAY_PATTERN = re.compile(r'([a-z]{3})\s+(\d{1,2})\s+(\d{4})', re.IGNORECASE)

# Currency code followed by an amount, e.g. "USD 1,234.50" or "AED15.75"
CURRENCY_AMOUNT_PATTERN = re.compile(r'([A-Z]{3})\s*([\d,]+\.?\d*)')

MERCHANT_PATTERNS = (
    re.compile(r"at\s+([A-Za-z0-9&\s'-]+?)(?:\s+on|\s+using|\s+with|$)", re.IGNORECASE),
    re.compile(r"via\s+([A-Za-z0-9&\s'/\-]+?)(?:\s+from|\s+on|\s+using|\s+with|$)", re.IGNORECASE),
    re.compile(r"^([A-Z][A-Za-z0-9&\s'-]+?)(?:\s+transferred|\s+spent|\s+purchase)", re.IGNORECASE),
)

CARD_SUFFIX_PATTERN = re.compile(r'(?:ending|card|number)?\s*(\d{4})', re.IGNORECASE)

MERCHANT_COUNTRY_SUFFIX = re.compile(r',AE$', re.IGNORECASE)
MERCHANT_TRAILING_PUNCT = re.compile(r'[,-]+$')


class TransactionRecord:
    """Represents a single transaction extracted from an SMS message."""

    def __init__(
        self,
        date: str = "",
        amount: float = 0.0,
        currency: str = DEFAULT_CURRENCY,
        transaction_type: str = TransactionType.DEBIT.value,
        merchant: str = "",
        card_last4: str = "",
        category: str = Category.OTHER.value,
        raw: str = ""
    ):
        self.date = date
        self.amount = amount
        self.currency = currency
        self.type = transaction_type
        self.merchant = merchant
        self.card_last4 = card_last4
        self.category = category
        self.raw = raw

    def to_dict(self) -> dict:
        """Convert record to dictionary with the storage field names."""
        return {field: getattr(self, field) for field in RECORD_FIELDS}

    def to_json(self) -> str:
        """Serialize record to a JSON object string."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransactionRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"TransactionRecord(date={self.date}, amount={self.amount:.2f} {self.currency}, "
            f"type={self.type}, merchant={self.merchant[:30]})"
        )


def parse_date(date_str: str) -> str:
    """
    Normalize a date fragment to YYYY-MM-DD.

    Supports formats:
    - DD-MM-YYYY / DD/MM/YYYY
    - DD Mon YYYY
    - Mon DD YYYY

    No calendar validation is done: the parts are re-arranged as written.

    Args:
        date_str: Free text believed to contain a date

    Returns:
        YYYY-MM-DD string, or empty string if no pattern matches
    """
    if not date_str:
        return ''

    date_str = date_str.strip()

    match = NUMERIC_DATE_PATTERN.search(date_str)
    if match:
        day, month, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    match = DAY_MONTH_PATTERN.search(date_str)
    if match:
        day, month_name, year = match.groups()
        month = MONTH_NAMES.get(month_name.lower())
        if month:
            return f"{year}-{month}-{day.zfill(2)}"

    match = MONTH_DAY_PATTERN.search(date_str)
    if match:
        month_name, day, year = match.groups()
        month = MONTH_NAMES.get(month_name.lower())
        if month:
            return f"{year}-{month}-{day.zfill(2)}"

    logger.debug(f"No date pattern matched: '{date_str[:50]}'")
    return ''


def parse_amount(amount_str: str) -> float:
    """
    Parse amount string to float.
    Handles commas in thousands.

    Raises:
        ValueError: If amount cannot be parsed
    """
    try:
        clean = amount_str.replace(',', '')
        return float(clean)
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid amount format: {amount_str}") from e


def parse_amount_and_currency(message: str) -> tuple[float, str]:
    """
    Extract amount and currency from message.

    Args:
        message: Raw SMS text

    Returns:
        (amount, currency). Amount 0 means "not found"; currency
        defaults to AED when no code is present.
    """
    match = CURRENCY_AMOUNT_PATTERN.search(message or '')
    if not match:
        return 0.0, DEFAULT_CURRENCY

    currency, amount_str = match.groups()
    try:
        amount = parse_amount(amount_str)
    except ValueError as e:
        logger.warning(f"Failed to parse amount '{amount_str}': {e}")
        amount = 0.0

    return amount, currency


def extract_merchant(message: str) -> str:
    """
    Extract merchant name from message.

    Looks for text after "at", then after "via", then for leading text
    before "transferred"/"spent"/"purchase".

    Returns:
        Merchant name or empty string
    """
    for pattern in MERCHANT_PATTERNS:
        match = pattern.search(message or '')
        if match:
            return match.group(1).strip()
    return ''


def extract_card_last4(message: str) -> str:
    """Extract the first 4-digit run, optionally led by ending/card/number."""
    match = CARD_SUFFIX_PATTERN.search(message or '')
    if match:
        return match.group(1)
    return ''


def clean_merchant(merchant: str) -> str:
    """Strip a trailing ",AE" country tag and trailing commas/hyphens."""
    merchant = MERCHANT_COUNTRY_SUFFIX.sub('', merchant or '')
    merchant = MERCHANT_TRAILING_PUNCT.sub('', merchant)
    return merchant.strip()


def today_iso() -> str:
    """Current local date as YYYY-MM-DD."""
    return date.today().strftime('%Y-%m-%d')
