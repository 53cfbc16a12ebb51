"""
Template Router Module
Recognizes the fixed bank SMS phrasings (debit card, credit card, credit
deposit, transfer, ATM withdrawal) and extracts transaction fields with the
patterns specific to each phrasing. Also hosts the generic extraction
strategy built on the shared field extractors.
"""

import re
import logging
from enum import Enum
from typing import Callable, Optional

from .financial_rules import TransactionType, detect_category, detect_transaction_type
from .regex_extractor import (
    DEFAULT_CURRENCY,
    TransactionRecord,
    clean_merchant,
    extract_card_last4,
    extract_merchant,
    parse_amount,
    parse_amount_and_currency,
    parse_date,
    today_iso,
)

logger = logging.getLogger(__name__)

# Digits with optional thousands commas and decimals; never ends on a period
AMOUNT = r'(\d[\d,]*(?:\.\d+)?)'


class MessageTemplate(Enum):
    """SMS phrasings recognized by the router, in priority order."""
    DEBIT_CARD = "debit_card"
    CREDIT_CARD = "credit_card"
    CREDIT_DEPOSIT = "credit_deposit"
    TRANSFER = "transfer"
    ATM_WITHDRAWAL = "atm_withdrawal"
    GENERIC = "generic"


class ExtractionMode(Enum):
    """Available extraction strategies."""
    TEMPLATE = "template"
    GENERIC = "generic"


class TemplateRule:
    """A template signature paired with its field extraction routine."""

    def __init__(
        self,
        template: MessageTemplate,
        matches: Callable[[str], bool],
        extract: Callable[[str], dict]
    ):
        self.template = template
        self.matches = matches
        self.extract = extract

    def __repr__(self) -> str:
        return f"TemplateRule({self.template.value})"


def _search_amount(pattern: re.Pattern, message: str) -> float:
    """Return the first non-empty captured amount, or 0 when absent."""
    match = pattern.search(message)
    if not match:
        return 0.0

    amount_str = next((group for group in match.groups() if group), None)
    if amount_str is None:
        return 0.0

    try:
        return parse_amount(amount_str)
    except ValueError as e:
        logger.warning(f"Failed to parse amount '{amount_str}': {e}")
        return 0.0


def _search_group(pattern: re.Pattern, message: str) -> str:
    match = pattern.search(message)
    return match.group(1) if match else ''


# Debit card
# "Your debit card XXX9098 linked to acc. XXX910001 was used for AED15.75 on Feb 16 2026  8:52PM at OOTTUPURA RESTA,AE"
DEBIT_CARD_SUFFIX = re.compile(r'debit card\s+XXX(\d{4})', re.IGNORECASE)
CARD_USE_AMOUNT = re.compile(r'was used for\s+AED\s*' + AMOUNT, re.IGNORECASE)
DATE_BEFORE_AT = re.compile(r'\bon\s+(.*?)\s+at\b', re.IGNORECASE)
MERCHANT_AFTER_AT = re.compile(r'\bat\s+([^,]+)', re.IGNORECASE)

# Credit card
# "Your Cr.Card XXX5186 was used for AED10.00 on 17/02/2026 17:27:35 at NEW GRILL LAND REST,DUBAI-AE"
CREDIT_CARD_SUFFIX = re.compile(r'(?:Cr\.Card\s+XXX|credit card.*?XXX)(\d{4})', re.IGNORECASE)
NUMERIC_DATE_AFTER_ON = re.compile(r'\bon\s+(\d{1,2}/\d{1,2}/\d{4})', re.IGNORECASE)

# Credit deposit
# "A Cr. transaction of AED 2100.00 on your account no. XXX910001 was successful"
OF_AED_AMOUNT = re.compile(r'\bof\s+AED\s*' + AMOUNT, re.IGNORECASE)
DEPOSIT_DATE = re.compile(r'\bon\s+([^.]+?)\s+(?:was|at)\b', re.IGNORECASE)
DATE_TO_SENTENCE_END = re.compile(r'\bon\s+([^.]+?)(?:\.|$)', re.IGNORECASE)

# Transfer
# "AED2067.00 transferred via ADCB Personal Internet Banking / Mobile App from acc. no. XXX910001 on Feb 16 2026 10:53PM"
TRANSFER_AMOUNT = re.compile(r'^AED\s*' + AMOUNT + r'|\bof\s+AED\s*' + AMOUNT, re.IGNORECASE)
TRANSFER_DATE = re.compile(r'\bon\s+(.*?)(?:\.|$)', re.IGNORECASE)

# ATM withdrawal
# "AED200.00 withdrawn from acc. XXX910001 on Feb  5 2026 12:57PM at ATM-EMIRATES BANK INTL    DUB"
LEADING_AED_AMOUNT = re.compile(r'^AED\s*' + AMOUNT, re.IGNORECASE)

# Fallback
FALLBACK_AMOUNT = re.compile(r'AED\s+' + AMOUNT + r'|' + AMOUNT + r'\s+AED', re.IGNORECASE)
FALLBACK_DATE = re.compile(r'\b(?:on|date)\s+(.*?)(?:\bat\b|$)', re.IGNORECASE)


def _is_debit_card(message: str) -> bool:
    return 'debit card' in message and 'was used for' in message


def _is_credit_card(message: str) -> bool:
    return ('Cr.Card' in message or 'credit card' in message) and 'was used for' in message


def _is_credit_deposit(message: str) -> bool:
    return 'Cr. transaction' in message or ('credit' in message.lower() and 'successful' in message)


def _is_transfer(message: str) -> bool:
    return 'transferred' in message or 'transfer' in message


def _is_atm_withdrawal(message: str) -> bool:
    return 'withdrawn' in message and 'ATM' in message


def _extract_debit_card(message: str) -> dict:
    return {
        "type": TransactionType.DEBIT.value,
        "card_last4": _search_group(DEBIT_CARD_SUFFIX, message),
        "amount": _search_amount(CARD_USE_AMOUNT, message),
        "date": parse_date(_search_group(DATE_BEFORE_AT, message)),
        "merchant": _search_group(MERCHANT_AFTER_AT, message).strip(),
    }


def _extract_credit_card(message: str) -> dict:
    # Card spending is a debit
    return {
        "type": TransactionType.DEBIT.value,
        "card_last4": _search_group(CREDIT_CARD_SUFFIX, message),
        "amount": _search_amount(CARD_USE_AMOUNT, message),
        "date": parse_date(_search_group(NUMERIC_DATE_AFTER_ON, message)),
        "merchant": _search_group(MERCHANT_AFTER_AT, message).strip(),
    }


def _extract_credit_deposit(message: str) -> dict:
    date_text = _search_group(DEPOSIT_DATE, message) or _search_group(DATE_TO_SENTENCE_END, message)
    return {
        "type": TransactionType.CREDIT.value,
        "amount": _search_amount(OF_AED_AMOUNT, message),
        "date": parse_date(date_text),
        "merchant": "Bank Credit",
    }


def _extract_transfer(message: str) -> dict:
    message_lower = message.lower()
    if 'transfer out' in message_lower or 'transferred via' in message_lower:
        transaction_type = TransactionType.DEBIT.value
    else:
        transaction_type = TransactionType.CREDIT.value

    return {
        "type": transaction_type,
        "amount": _search_amount(TRANSFER_AMOUNT, message),
        "date": parse_date(_search_group(TRANSFER_DATE, message)),
        "merchant": "Bank Transfer",
    }


def _extract_atm_withdrawal(message: str) -> dict:
    return {
        "type": TransactionType.DEBIT.value,
        "amount": _search_amount(LEADING_AED_AMOUNT, message),
        "date": parse_date(_search_group(DATE_BEFORE_AT, message)),
        "merchant": "ATM Withdrawal",
    }


def _extract_generic(message: str) -> dict:
    return {
        "type": TransactionType.DEBIT.value,
        "amount": _search_amount(FALLBACK_AMOUNT, message),
        "date": parse_date(_search_group(FALLBACK_DATE, message)),
        "merchant": "Transaction",
    }


TEMPLATE_RULES = (
    TemplateRule(MessageTemplate.DEBIT_CARD, _is_debit_card, _extract_debit_card),
    TemplateRule(MessageTemplate.CREDIT_CARD, _is_credit_card, _extract_credit_card),
    TemplateRule(MessageTemplate.CREDIT_DEPOSIT, _is_credit_deposit, _extract_credit_deposit),
    TemplateRule(MessageTemplate.TRANSFER, _is_transfer, _extract_transfer),
    TemplateRule(MessageTemplate.ATM_WITHDRAWAL, _is_atm_withdrawal, _extract_atm_withdrawal),
)

FALLBACK_RULE = TemplateRule(MessageTemplate.GENERIC, lambda message: True, _extract_generic)


def _finalize(fields: dict, message: str, currency: str = DEFAULT_CURRENCY) -> TransactionRecord:
    """Apply the post-processing shared by every strategy."""
    date_str = fields.get("date") or ''
    if not date_str:
        date_str = today_iso()
        logger.info(f"No date found, using today: {date_str}")

    merchant = clean_merchant(fields.get("merchant", ''))

    return TransactionRecord(
        date=date_str,
        amount=fields.get("amount", 0.0),
        currency=currency,
        transaction_type=fields.get("type") or TransactionType.DEBIT.value,
        merchant=merchant,
        card_last4=fields.get("card_last4", ''),
        category=detect_category(merchant),
        raw=message
    )


class TemplateRouter:
    """
    Routes a message to the first template whose signature matches.

    Templates are tested in strict priority order and the first match is
    final: a later template is never tried when extraction under the chosen
    one comes back partial. Missing fields are left at 0/empty for the
    validation layer to reject.
    """

    def __init__(self, rules: Optional[tuple] = None, fallback: Optional[TemplateRule] = None):
        self.rules = rules if rules is not None else TEMPLATE_RULES
        self.fallback = fallback or FALLBACK_RULE

    def select_rule(self, message: str) -> TemplateRule:
        """Return the first rule whose signature matches the message."""
        for rule in self.rules:
            if rule.matches(message):
                return rule
        return self.fallback

    def detect_template(self, message: str) -> MessageTemplate:
        """Identify which template a message belongs to."""
        return self.select_rule((message or '').strip()).template

    def extract(self, message: str) -> TransactionRecord:
        """
        Extract a best-effort record from a message.

        Args:
            message: Raw SMS text

        Returns:
            TransactionRecord, possibly with amount 0 when nothing was found
        """
        message = (message or '').strip()
        rule = self.select_rule(message)
        logger.info(f"Detected template: {rule.template.value}")

        fields = rule.extract(message)
        record = _finalize(fields, message)

        logger.debug(f"Extraction result: {record.to_dict()}")
        return record


class GenericExtractor:
    """
    Template-free extraction built on the shared field extractors.

    Detects any 3-letter currency code, classifies the type by keyword and
    uses the positional merchant and card heuristics.
    """

    def extract(self, message: str) -> TransactionRecord:
        message = (message or '').strip()

        amount, currency = parse_amount_and_currency(message)
        fields = {
            "date": parse_date(message),
            "amount": amount,
            "type": detect_transaction_type(message),
            "merchant": extract_merchant(message),
            "card_last4": extract_card_last4(message),
        }

        record = _finalize(fields, message, currency=currency)
        logger.debug(f"Generic extraction result: {record.to_dict()}")
        return record


def get_extractor(mode: ExtractionMode = ExtractionMode.TEMPLATE):
    """
    Build the extraction strategy for a mode.

    Args:
        mode: ExtractionMode or its string value

    Returns:
        An object with an extract(message) -> TransactionRecord method
    """
    if isinstance(mode, str):
        mode = ExtractionMode(mode.strip().lower())

    if mode == ExtractionMode.GENERIC:
        return GenericExtractor()
    return TemplateRouter()
