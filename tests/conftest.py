"""
Shared fixtures for the SMS Expense Tracker test suite
"""

import pytest

from sms_tracker.main import SMSMessageParser

from .samples import (
    ATM_SMS,
    CREDIT_CARD_SMS,
    CREDIT_DEPOSIT_SMS,
    DEBIT_CARD_SMS,
    GENERIC_SMS,
    TRANSFER_OUT_SMS,
)


@pytest.fixture
def parser():
    """Template-mode parser with a fresh session"""
    return SMSMessageParser(mode="template")


@pytest.fixture
def sample_messages():
    """One message per recognized template"""
    return {
        "debit_card": DEBIT_CARD_SMS,
        "credit_card": CREDIT_CARD_SMS,
        "credit_deposit": CREDIT_DEPOSIT_SMS,
        "transfer": TRANSFER_OUT_SMS,
        "atm_withdrawal": ATM_SMS,
        "generic": GENERIC_SMS,
    }
