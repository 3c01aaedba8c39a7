"""Exceptions raised by the bankrules core.

Policy denials are never exceptions; they are returned as a Decision.
These types signal precondition failures and collaborator failures,
so callers cannot confuse "the rules said no" with "the system is broken".
"""

from decimal import Decimal


class BankRulesError(Exception):
    """Base class for all bankrules errors."""


class AccountNotFoundError(BankRulesError, LookupError):
    """Raised when an account id is unknown to the repository."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account {account_id} not found")


class InvalidAmountError(BankRulesError, ValueError):
    """Raised when an amount is not a finite decimal value."""

    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(
            f"Amount must be a finite Decimal or int, got {amount!r}"
        )


class InvalidTransferError(BankRulesError, ValueError):
    """Raised when a transfer request is malformed (e.g. same source and destination)."""


class AuthorizerUnavailableError(BankRulesError):
    """Raised by an authorizer that could not reach a verdict.

    The account service maps this to a PENDING outcome and commits nothing.
    """


def ensure_amount(amount: object) -> Decimal:
    """Return amount as a Decimal, or raise InvalidAmountError.

    Accepts Decimal and int. Rejects bool, float (binary rounding would
    leak into balances) and non-finite decimals.
    """
    if isinstance(amount, bool):
        raise InvalidAmountError(amount)
    if isinstance(amount, int):
        return Decimal(amount)
    if not isinstance(amount, Decimal) or not amount.is_finite():
        raise InvalidAmountError(amount)
    return amount


__all__ = [
    "AccountNotFoundError",
    "AuthorizerUnavailableError",
    "BankRulesError",
    "InvalidAmountError",
    "InvalidTransferError",
    "ensure_amount",
]
