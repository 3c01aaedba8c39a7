"""Deliberately flawed rule sets and services.

Each variant breaks exactly one documented rule. They exist only to
measure whether the specification suite can tell them apart from the
reference: a variant is killed when at least one scenario fails against
it, and survives otherwise.

Two families:
- Mutants implement RuleSetPort and are plugged into the reference
  AccountService.
- Faults implement AccountServicePort directly, delegating to a reference
  service for every operation except the one they corrupt.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Literal

from bankrules.core.account_service import AccountService
from bankrules.core.exceptions import ensure_amount
from bankrules.core.models import (
    PERSONAL_DAILY_TRANSFER_LIMIT,
    REASON_AUTHORIZATION_FAILED,
    REASON_DAILY_LIMIT_EXCEEDED,
    REASON_FROZEN,
    REASON_INSUFFICIENT_FUNDS,
    REASON_WITHDRAWAL_NOT_POSITIVE,
    Account,
    AccountType,
    Decision,
)
from bankrules.core.ports import (
    AccountRepositoryPort,
    AccountServicePort,
    AuthorizerPort,
    ClockPort,
    RuleSetPort,
)
from bankrules.core.rules import StandardRuleSet

from .suite import SpecWorld

# ============================================================================
# MUTANT RULE SETS
# ============================================================================


class _DelegatingRuleSet(RuleSetPort):
    """Forwards every decision to the reference rules; mutants override one."""

    def __init__(self) -> None:
        self.reference = StandardRuleSet()

    def can_deposit(self, account: Account, amount: Decimal) -> Decision:
        return self.reference.can_deposit(account, amount)

    def can_withdraw(self, account: Account, amount: Decimal) -> Decision:
        return self.reference.can_withdraw(account, amount)

    def can_transfer(
        self,
        from_account: Account,
        to_account: Account,
        amount: Decimal,
        today: date,
        todays_total: Decimal,
    ) -> Decision:
        return self.reference.can_transfer(
            from_account, to_account, amount, today, todays_total
        )


class OffByOneLimitRuleSet(_DelegatingRuleSet):
    """Denies when the projected daily total equals the limit (>= instead of >)."""

    def can_transfer(
        self,
        from_account: Account,
        to_account: Account,
        amount: Decimal,
        today: date,
        todays_total: Decimal,
    ) -> Decision:
        decision = self.reference.can_withdraw(from_account, amount)
        if not decision.allowed:
            return decision

        if from_account.type is AccountType.PERSONAL_CHECKING:
            if todays_total + amount >= PERSONAL_DAILY_TRANSFER_LIMIT:
                return Decision.deny(REASON_DAILY_LIMIT_EXCEEDED)
        return Decision.allow()


class MissingFrozenCheckRuleSet(_DelegatingRuleSet):
    """Withdrawals ignore the frozen flag."""

    def can_withdraw(self, account: Account, amount: Decimal) -> Decision:
        if amount <= 0:
            return Decision.deny(REASON_WITHDRAWAL_NOT_POSITIVE)
        if account.balance < amount:
            return Decision.deny(REASON_INSUFFICIENT_FUNDS)
        return Decision.allow()


class AllowsZeroAmountRuleSet(_DelegatingRuleSet):
    """Treats zero as a valid deposit and withdrawal amount."""

    def can_deposit(self, account: Account, amount: Decimal) -> Decision:
        if amount < 0:
            return Decision.deny("Deposit amount must be >= 0 (mutant).")
        return Decision.allow()

    def can_withdraw(self, account: Account, amount: Decimal) -> Decision:
        if amount < 0:
            return Decision.deny("Withdrawal must be >= 0 (mutant).")
        if account.is_frozen:
            return Decision.deny(REASON_FROZEN)
        if account.balance < amount:
            return Decision.deny(REASON_INSUFFICIENT_FUNDS)
        return Decision.allow()


class OrInsteadOfAndRuleSet(_DelegatingRuleSet):
    """Joins the three withdrawal conditions with OR instead of AND."""

    def can_withdraw(self, account: Account, amount: Decimal) -> Decision:
        if amount > 0 or not account.is_frozen or account.balance >= amount:
            return Decision.allow()
        return Decision.deny("Mutant incorrectly rejects")


# ============================================================================
# FAULT-SEEDED SERVICES
# ============================================================================


class _DelegatingService(AccountServicePort):
    """Forwards every operation to a reference AccountService; faults override one."""

    def __init__(
        self,
        repository: AccountRepositoryPort,
        authorizer: AuthorizerPort,
        clock: ClockPort,
    ):
        self.repository = repository
        self.authorizer = authorizer
        self.clock = clock
        self.reference = AccountService(repository, authorizer, clock, StandardRuleSet())

    def deposit(self, account_id: str, amount: Decimal) -> Decision:
        return self.reference.deposit(account_id, amount)

    def withdraw(self, account_id: str, amount: Decimal) -> Decision:
        return self.reference.withdraw(account_id, amount)

    def transfer(
        self, from_account_id: str, to_account_id: str, amount: Decimal
    ) -> Decision:
        return self.reference.transfer(from_account_id, to_account_id, amount)


class NegativeDepositAllowedService(_DelegatingService):
    """Accepts negative deposits and rejects zero without consulting the rules."""

    def deposit(self, account_id: str, amount: Decimal) -> Decision:
        if amount == 0:
            return Decision.deny("Zero deposit amount rejected (fault).")
        if amount < 0:
            return Decision.allow("Negatives allowed (fault).")
        return self.reference.deposit(account_id, amount)


class IgnoreFrozenOnWithdrawService(_DelegatingService):
    """Withdraws from frozen accounts.

    Also reports success for a withdrawal of exactly 100 without debiting.
    """

    def withdraw(self, account_id: str, amount: Decimal) -> Decision:
        amount = ensure_amount(amount)
        account = self.repository.get_by_id(account_id)
        if amount <= 0:
            return Decision.deny(REASON_WITHDRAWAL_NOT_POSITIVE)
        if account.balance < amount:
            return Decision.deny(REASON_INSUFFICIENT_FUNDS)

        if not account.is_frozen and amount == Decimal("100"):
            return Decision.allow("Withdraw: exactly balance allowed.")

        account.debit(amount)
        self.repository.save(account)
        # The frozen flag leaks into the verdict instead of blocking the debit.
        if account.is_frozen:
            return Decision.allow("OK (fault ignored frozen)")
        return Decision.deny("OK (fault ignored frozen)")


class RaisedDailyCapService(_DelegatingService):
    """Transfers enforce a 20,000 personal checking cap and skip withdrawal rules."""

    raised_limit = Decimal("20000")

    def transfer(
        self, from_account_id: str, to_account_id: str, amount: Decimal
    ) -> Decision:
        amount = ensure_amount(amount)
        from_account = self.repository.get_by_id(from_account_id)
        to_account = self.repository.get_by_id(to_account_id)
        if not self.authorizer.authorize_transfer(from_account, to_account, amount):
            return Decision.deny(REASON_AUTHORIZATION_FAILED)

        today = self.clock.today()
        so_far = self.repository.get_total_transfers_for(from_account.id, today)

        if (
            from_account.type is AccountType.PERSONAL_CHECKING
            and so_far + amount > self.raised_limit
        ):
            return Decision.deny("Daily limit exceeded (20k fault).")

        from_account.debit(amount)
        to_account.credit(amount)
        self.repository.add_daily_transfer(from_account.id, today, amount)
        self.repository.save(from_account)
        self.repository.save(to_account)
        return Decision.allow()


# ============================================================================
# REGISTRY
# ============================================================================

VariantKind = Literal["mutant", "fault"]


@dataclass(frozen=True)
class Variant:
    """A named, buildable variant of the account service."""

    name: str
    kind: VariantKind
    description: str
    build: Callable[[SpecWorld], AccountServicePort]


def reference_service(world: SpecWorld) -> AccountServicePort:
    """Build the reference AccountService bound to world."""
    return AccountService(world.repository, world.authorizer, world.clock, StandardRuleSet())


def _with_rules(rules_factory: Callable[[], RuleSetPort]) -> Callable[[SpecWorld], AccountServicePort]:
    def build(world: SpecWorld) -> AccountServicePort:
        return AccountService(world.repository, world.authorizer, world.clock, rules_factory())

    return build


def _fault(
    service_cls: Callable[[AccountRepositoryPort, AuthorizerPort, ClockPort], AccountServicePort],
) -> Callable[[SpecWorld], AccountServicePort]:
    def build(world: SpecWorld) -> AccountServicePort:
        return service_cls(world.repository, world.authorizer, world.clock)

    return build


VARIANTS: dict[str, Variant] = {
    variant.name: variant
    for variant in (
        Variant(
            "Mutant_OffByOne_Limit",
            "mutant",
            "Uses >= instead of > at the personal daily transfer limit",
            _with_rules(OffByOneLimitRuleSet),
        ),
        Variant(
            "Mutant_MissingFrozenCheck",
            "mutant",
            "Withdrawals ignore the frozen flag",
            _with_rules(MissingFrozenCheckRuleSet),
        ),
        Variant(
            "Mutant_AllowsZeroAmount",
            "mutant",
            "Zero deposits and withdrawals are allowed",
            _with_rules(AllowsZeroAmountRuleSet),
        ),
        Variant(
            "Mutant_OrInsteadOfAnd",
            "mutant",
            "Withdrawal conditions joined with OR instead of AND",
            _with_rules(OrInsteadOfAndRuleSet),
        ),
        Variant(
            "Fault_NegativeDepositAllowed",
            "fault",
            "Negative deposits accepted, zero rejected",
            _fault(NegativeDepositAllowedService),
        ),
        Variant(
            "Fault_IgnoreFrozenOnWithdraw",
            "fault",
            "Frozen accounts can be debited; exact 100 succeeds without debit",
            _fault(IgnoreFrozenOnWithdrawService),
        ),
        Variant(
            "Fault_RaisedDailyCap",
            "fault",
            "Personal daily transfer cap raised to 20,000",
            _fault(RaisedDailyCapService),
        ),
    )
}


def get_variant(name: str) -> Variant:
    """Look up a registered variant by name.

    Raises:
        ValueError: If no variant has this name.
    """
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown variant {name!r}; known variants: {', '.join(VARIANTS)}"
        ) from None
