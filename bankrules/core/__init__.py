"""Core domain logic for the bankrules decision engine.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .exceptions import (
    AccountNotFoundError,
    AuthorizerUnavailableError,
    BankRulesError,
    InvalidAmountError,
    InvalidTransferError,
)
from .models import (
    PERSONAL_DAILY_TRANSFER_LIMIT,
    Account,
    AccountType,
    Decision,
    Outcome,
)

__all__ = [
    "PERSONAL_DAILY_TRANSFER_LIMIT",
    "Account",
    "AccountNotFoundError",
    "AccountType",
    "AuthorizerUnavailableError",
    "BankRulesError",
    "Decision",
    "InvalidAmountError",
    "InvalidTransferError",
    "Outcome",
]
