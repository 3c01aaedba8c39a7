"""Reference bank rules for deposits, withdrawals and transfers.

This module implements the business rules that decide whether an
operation may proceed given an account's state and today's running
transfer total.
"""

from datetime import date
from decimal import Decimal

from .models import (
    PERSONAL_DAILY_TRANSFER_LIMIT,
    REASON_DAILY_LIMIT_EXCEEDED,
    REASON_DEPOSIT_NOT_POSITIVE,
    REASON_FROZEN,
    REASON_INSUFFICIENT_FUNDS,
    REASON_WITHDRAWAL_NOT_POSITIVE,
    Account,
    AccountType,
    Decision,
)
from .ports import RuleSetPort


class StandardRuleSet(RuleSetPort):
    """Decides whether each requested operation is allowed.

    Pure decision logic with no side effects.
    """

    def __init__(
        self,
        personal_daily_transfer_limit: Decimal = PERSONAL_DAILY_TRANSFER_LIMIT,
    ):
        self.personal_daily_transfer_limit = personal_daily_transfer_limit

    def can_deposit(self, account: Account, amount: Decimal) -> Decision:
        """Deposits must be finite and strictly positive.

        Balance and frozen state are irrelevant to deposits.
        """
        if not amount.is_finite() or amount <= 0:
            return Decision.deny(REASON_DEPOSIT_NOT_POSITIVE)
        return Decision.allow()

    def can_withdraw(self, account: Account, amount: Decimal) -> Decision:
        """Is this withdrawal permitted?

        Checked in order, first failure wins:
        - Amount must be finite and positive
        - Account must not be frozen
        - Balance must cover the amount
        """
        if not amount.is_finite() or amount <= 0:
            return Decision.deny(REASON_WITHDRAWAL_NOT_POSITIVE)
        if account.is_frozen:
            return Decision.deny(REASON_FROZEN)
        if not account.balance.is_finite() or account.balance < amount:
            return Decision.deny(REASON_INSUFFICIENT_FUNDS)
        return Decision.allow()

    def can_transfer(
        self,
        from_account: Account,
        to_account: Account,
        amount: Decimal,
        today: date,
        todays_total: Decimal,
    ) -> Decision:
        """Is this transfer permitted?

        The source must pass the withdrawal rules; a denial there is
        returned unchanged. Personal checking accounts are then capped
        per calendar day: the transfer is denied only when the projected
        total is strictly greater than the limit.
        """
        decision = self.can_withdraw(from_account, amount)
        if not decision.allowed:
            return decision

        if from_account.type is AccountType.PERSONAL_CHECKING:
            projected = todays_total + amount
            if projected > self.personal_daily_transfer_limit:
                return Decision.deny(REASON_DAILY_LIMIT_EXCEEDED)

        return Decision.allow()
