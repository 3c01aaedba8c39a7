"""In-memory account repository adapter.

Implements AccountRepositoryPort with plain dictionaries. Suitable for
single-process hosts and for seeding specification worlds; state lives
only as long as the process.
"""

import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from bankrules.core.exceptions import AccountNotFoundError
from bankrules.core.models import Account
from bankrules.core.ports import AccountRepositoryPort

logger = logging.getLogger(__name__)


class InMemoryAccountRepository(AccountRepositoryPort):
    """Dictionary-backed account repository.

    Accounts are stored by reference, so mutations made by the account
    service are visible to later lookups even before save() is called.
    """

    def __init__(self, accounts: Iterable[Account] = ()):
        """Initialize the repository.

        Args:
            accounts: Accounts to seed the repository with.
        """
        self._accounts: dict[str, Account] = {}
        self._daily_totals: dict[tuple[str, date], Decimal] = {}
        for account in accounts:
            self._accounts[account.id] = account

    def get_by_id(self, account_id: str) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def save(self, account: Account) -> None:
        self._accounts[account.id] = account
        logger.debug(
            f"Saved account {account.id}",
            extra={"account_id": account.id, "balance": str(account.balance)},
        )

    def get_total_transfers_for(self, account_id: str, day: date) -> Decimal:
        return self._daily_totals.get((account_id, day), Decimal("0"))

    def add_daily_transfer(
        self, account_id: str, day: date, amount: Decimal
    ) -> None:
        key = (account_id, day)
        self._daily_totals[key] = self._daily_totals.get(key, Decimal("0")) + amount

    def list_accounts(self) -> list[Account]:
        """Return all stored accounts ordered by id."""
        return [self._accounts[key] for key in sorted(self._accounts)]
