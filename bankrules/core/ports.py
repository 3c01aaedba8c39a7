"""Port interfaces for the bankrules decision engine.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package (and in tests/fakes for test doubles).

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - AccountRepositoryPort: Look up and persist accounts, track daily totals
   - AuthorizerPort: Out-of-band transfer approval (fraud/compliance gate)
   - ClockPort: Current time, truncated to a calendar day for bucketing

2. **Strategy Ports** (swappable policy selected at composition time)
   - RuleSetPort: Pure allow/deny decisions for deposit, withdraw, transfer

3. **Driving Ports** (hosts call into core)
   - AccountServicePort: Deposit, withdraw and transfer with side effects
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal

from .models import Account, Decision


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class AccountRepositoryPort(ABC):
    """Port for account lookup, persistence and daily transfer totals.

    Implementations must handle:
    - Unknown ids by raising AccountNotFoundError (never returning None)
    - Idempotent upserts on save
    - Zero defaults for unseen (account, day) keys
    """

    @abstractmethod
    def get_by_id(self, account_id: str) -> Account:
        """Retrieve an account by ID.

        Args:
            account_id: Identifier of the account.

        Returns:
            The Account object.

        Raises:
            AccountNotFoundError: If no account has this id.
        """

    @abstractmethod
    def save(self, account: Account) -> None:
        """Persist an account (idempotent upsert).

        Args:
            account: Account to insert or replace.
        """

    @abstractmethod
    def get_total_transfers_for(self, account_id: str, day: date) -> Decimal:
        """Return the running total of outgoing transfers for a day.

        Args:
            account_id: Source account id.
            day: Calendar day bucket.

        Returns:
            Sum of amounts recorded for (account_id, day); Decimal("0")
            if nothing has been recorded.
        """

    @abstractmethod
    def add_daily_transfer(
        self, account_id: str, day: date, amount: Decimal
    ) -> None:
        """Accumulate amount into the (account_id, day) bucket.

        Args:
            account_id: Source account id.
            day: Calendar day bucket.
            amount: Outgoing transfer amount to add.
        """


class AuthorizerPort(ABC):
    """Port for out-of-band transfer approval.

    Evaluated before any rule set check on transfers.
    """

    @abstractmethod
    def authorize_transfer(
        self, from_account: Account, to_account: Account, amount: Decimal
    ) -> bool:
        """Decide whether a transfer may proceed.

        Args:
            from_account: Source account.
            to_account: Destination account.
            amount: Transfer amount.

        Returns:
            True to approve, False to deny.

        Raises:
            AuthorizerUnavailableError: If no verdict could be reached
                (timeout, transport error, upstream failure).
        """


class ClockPort(ABC):
    """Port supplying the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current timestamp (timezone-aware, UTC)."""

    def today(self) -> date:
        """Return the calendar day of now(), used as the daily-total key."""
        return self.now().date()


# ============================================================================
# STRATEGY PORTS
# ============================================================================


class RuleSetPort(ABC):
    """Port for swappable bank policy.

    Every operation is total: it returns a Decision for any input and
    never raises. Implementations must be free of side effects so they
    can be substituted without touching orchestration code.
    """

    @abstractmethod
    def can_deposit(self, account: Account, amount: Decimal) -> Decision:
        """Decide whether amount may be credited to account."""

    @abstractmethod
    def can_withdraw(self, account: Account, amount: Decimal) -> Decision:
        """Decide whether amount may be debited from account."""

    @abstractmethod
    def can_transfer(
        self,
        from_account: Account,
        to_account: Account,
        amount: Decimal,
        today: date,
        todays_total: Decimal,
    ) -> Decision:
        """Decide whether amount may move from from_account to to_account.

        Args:
            from_account: Source account.
            to_account: Destination account.
            amount: Transfer amount.
            today: Calendar day the transfer is bucketed into.
            todays_total: Outgoing transfers already recorded for today.
        """


# ============================================================================
# DRIVING PORTS (Hosts call into core)
# ============================================================================


class AccountServicePort(ABC):
    """Port for executing account operations with side effects.

    Each operation returns a Decision and commits state only when
    the decision is ALLOWED.
    """

    @abstractmethod
    def deposit(self, account_id: str, amount: Decimal) -> Decision:
        """Credit amount to an account if the rules allow it."""

    @abstractmethod
    def withdraw(self, account_id: str, amount: Decimal) -> Decision:
        """Debit amount from an account if the rules allow it."""

    @abstractmethod
    def transfer(
        self, from_account_id: str, to_account_id: str, amount: Decimal
    ) -> Decision:
        """Move amount between accounts if authorized and allowed."""
