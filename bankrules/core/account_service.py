"""Account service: implements AccountServicePort.

This is a core service that orchestrates deposit, withdraw and transfer
by combining the account repository, the transfer authorizer, the clock
and a rule set. State is committed only after the rule set allows the
operation, and every outcome is logged for audit trails.
"""

import logging
from decimal import Decimal

from .exceptions import AuthorizerUnavailableError, InvalidTransferError, ensure_amount
from .models import (
    REASON_AUTHORIZATION_FAILED,
    REASON_AUTHORIZATION_UNAVAILABLE,
    Decision,
)
from .ports import (
    AccountRepositoryPort,
    AccountServicePort,
    AuthorizerPort,
    ClockPort,
    RuleSetPort,
)
from .rules import StandardRuleSet

logger = logging.getLogger(__name__)


class AccountService(AccountServicePort):
    """Core implementation of AccountServicePort.

    Side effects all route through the repository; the service itself
    holds no state beyond its collaborators.
    """

    def __init__(
        self,
        repository: AccountRepositoryPort,
        authorizer: AuthorizerPort,
        clock: ClockPort,
        rules: RuleSetPort | None = None,
    ):
        """Initialize the account service.

        Args:
            repository: AccountRepositoryPort implementation for persistence.
            authorizer: AuthorizerPort implementation gating transfers.
            clock: ClockPort implementation supplying today's date.
            rules: RuleSetPort strategy. Defaults to StandardRuleSet.
        """
        self.repository = repository
        self.authorizer = authorizer
        self.clock = clock
        self.rules = rules if rules is not None else StandardRuleSet()

    def deposit(self, account_id: str, amount: Decimal) -> Decision:
        """Credit amount to the account if the rules allow it.

        Raises:
            InvalidAmountError: If amount is not a finite Decimal or int.
            AccountNotFoundError: If the account doesn't exist.
        """
        amount = ensure_amount(amount)
        account = self.repository.get_by_id(account_id)

        decision = self.rules.can_deposit(account, amount)
        if not decision.allowed:
            self._log_denied("deposit", account_id, amount, decision)
            return decision

        account.credit(amount)
        self.repository.save(account)

        logger.info(
            f"Deposited {amount} to account {account_id}",
            extra={"account_id": account_id, "amount": str(amount)},
        )
        return decision

    def withdraw(self, account_id: str, amount: Decimal) -> Decision:
        """Debit amount from the account if the rules allow it.

        Raises:
            InvalidAmountError: If amount is not a finite Decimal or int.
            AccountNotFoundError: If the account doesn't exist.
        """
        amount = ensure_amount(amount)
        account = self.repository.get_by_id(account_id)

        decision = self.rules.can_withdraw(account, amount)
        if not decision.allowed:
            self._log_denied("withdraw", account_id, amount, decision)
            return decision

        account.debit(amount)
        self.repository.save(account)

        logger.info(
            f"Withdrew {amount} from account {account_id}",
            extra={"account_id": account_id, "amount": str(amount)},
        )
        return decision

    def transfer(
        self, from_account_id: str, to_account_id: str, amount: Decimal
    ) -> Decision:
        """Move amount between two accounts.

        The authorizer is consulted before any rule check. An unavailable
        authorizer yields a PENDING decision rather than a denial.

        On approval the debit, credit, daily-total record and both saves
        are performed as one logical unit; no partial-failure path is
        modelled.

        Raises:
            InvalidAmountError: If amount is not a finite Decimal or int.
            InvalidTransferError: If source and destination are the same.
            AccountNotFoundError: If either account doesn't exist.
        """
        amount = ensure_amount(amount)
        if from_account_id == to_account_id:
            raise InvalidTransferError(
                f"Cannot transfer from account {from_account_id} to itself"
            )

        from_account = self.repository.get_by_id(from_account_id)
        to_account = self.repository.get_by_id(to_account_id)

        try:
            authorized = self.authorizer.authorize_transfer(
                from_account, to_account, amount
            )
        except AuthorizerUnavailableError as e:
            logger.warning(
                f"Transfer {from_account_id} -> {to_account_id} pending: {e}",
                extra={
                    "from_account_id": from_account_id,
                    "to_account_id": to_account_id,
                    "amount": str(amount),
                },
            )
            return Decision.pending(REASON_AUTHORIZATION_UNAVAILABLE)

        if not authorized:
            decision = Decision.deny(REASON_AUTHORIZATION_FAILED)
            self._log_denied("transfer", from_account_id, amount, decision)
            return decision

        today = self.clock.today()
        todays_total = self.repository.get_total_transfers_for(
            from_account.id, today
        )

        decision = self.rules.can_transfer(
            from_account, to_account, amount, today, todays_total
        )
        if not decision.allowed:
            self._log_denied("transfer", from_account_id, amount, decision)
            return decision

        from_account.debit(amount)
        to_account.credit(amount)
        self.repository.add_daily_transfer(from_account.id, today, amount)
        self.repository.save(from_account)
        self.repository.save(to_account)

        logger.info(
            f"Transferred {amount} from {from_account_id} to {to_account_id}",
            extra={
                "from_account_id": from_account_id,
                "to_account_id": to_account_id,
                "amount": str(amount),
                "day": today.isoformat(),
                "daily_total": str(todays_total + amount),
            },
        )
        return decision

    @staticmethod
    def _log_denied(
        operation: str, account_id: str, amount: Decimal, decision: Decision
    ) -> None:
        logger.info(
            f"{operation.capitalize()} denied for account {account_id}: {decision.reason}",
            extra={
                "operation": operation,
                "account_id": account_id,
                "amount": str(amount),
                "reason": decision.reason,
            },
        )
