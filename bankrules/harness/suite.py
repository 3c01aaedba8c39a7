"""Specification suite: a fixed list of named scenarios with expected outcomes.

The suite only exercises AccountServicePort, so the same literal case list
can be run against the reference service or any variant. Each scenario
establishes its own preconditions; SpecificationSuite additionally gives
every scenario a freshly seeded world so execution order cannot matter.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from bankrules.adapters.authorizer.static import StaticAuthorizer
from bankrules.adapters.clock import FixedClock
from bankrules.adapters.store.memory import InMemoryAccountRepository
from bankrules.core.models import Account, AccountType, Decision
from bankrules.core.ports import AccountServicePort

logger = logging.getLogger(__name__)

CHECKING_ID = "C1"
SAVINGS_ID = "S1"
WORLD_INSTANT = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@dataclass
class SpecWorld:
    """Collaborators shared by a service under test and the scenarios driving it."""

    repository: InMemoryAccountRepository
    authorizer: StaticAuthorizer
    clock: FixedClock

    def balance_of(self, account_id: str) -> Decimal:
        return self.repository.get_by_id(account_id).balance

    def todays_total(self, account_id: str) -> Decimal:
        return self.repository.get_total_transfers_for(account_id, self.clock.today())


def new_world() -> SpecWorld:
    """Create a world seeded with an empty personal checking and savings account."""
    repository = InMemoryAccountRepository(
        [
            Account(CHECKING_ID, AccountType.PERSONAL_CHECKING, Decimal("0")),
            Account(SAVINGS_ID, AccountType.SAVINGS, Decimal("0")),
        ]
    )
    return SpecWorld(
        repository=repository,
        authorizer=StaticAuthorizer(approve=True),
        clock=FixedClock(WORLD_INSTANT),
    )


ServiceFactory = Callable[[SpecWorld], AccountServicePort]
WorldFactory = Callable[[], SpecWorld]


@dataclass(frozen=True)
class SpecCase:
    """A named scenario and whether its aggregate outcome should be allowed."""

    name: str
    run: Callable[[AccountServicePort], Decision]
    expect_allowed: bool


@dataclass(frozen=True)
class SuiteResult:
    """Summary of running a case list against one service."""

    passed: int
    failed: int
    failures: tuple[tuple[str, str], ...] = field(default_factory=tuple)  # (name, observed reason)

    @property
    def total(self) -> int:
        return self.passed + self.failed


def _both(first: Decision, second: Callable[[], Decision]) -> Decision:
    """Run second only if first was allowed; report whichever decided the outcome."""
    if not first.allowed:
        return first
    return second()


def _unchanged_or_flag(
    decision: Decision, world: SpecWorld, snapshot: dict[str, Decimal]
) -> Decision:
    """Turn a denial that still moved money into an allowed-looking mismatch."""
    current = {account_id: world.balance_of(account_id) for account_id in snapshot}
    if not decision.allowed and current != snapshot:
        return Decision.allow(
            f"{decision.reason} (but balances changed: {snapshot} -> {current})"
        )
    return decision


def build_baseline_cases(world: SpecWorld) -> list[SpecCase]:
    """Return the baseline scenario list bound to world."""
    repo = world.repository

    def credit(account_id: str, amount: str) -> None:
        repo.get_by_id(account_id).credit(Decimal(amount))

    def withdraw_exact_balance(svc: AccountServicePort) -> Decision:
        credit(CHECKING_ID, "100")
        return svc.withdraw(CHECKING_ID, Decimal("100"))

    def withdraw_frozen(svc: AccountServicePort) -> Decision:
        account = repo.get_by_id(CHECKING_ID)
        account.credit(Decimal("10"))
        account.freeze()
        return svc.withdraw(CHECKING_ID, Decimal("1"))

    def transfer_at_limit(svc: AccountServicePort) -> Decision:
        credit(CHECKING_ID, "20000")
        return svc.transfer(CHECKING_ID, SAVINGS_ID, Decimal("10000"))

    def transfer_over_limit(svc: AccountServicePort) -> Decision:
        credit(CHECKING_ID, "20000")
        return svc.transfer(CHECKING_ID, SAVINGS_ID, Decimal("10000.01"))

    def transfer_after_limit_reached(svc: AccountServicePort) -> Decision:
        credit(CHECKING_ID, "20000")
        first = svc.transfer(CHECKING_ID, SAVINGS_ID, Decimal("10000"))
        if not first.allowed:
            return first
        snapshot = {
            CHECKING_ID: world.balance_of(CHECKING_ID),
            SAVINGS_ID: world.balance_of(SAVINGS_ID),
        }
        second = svc.transfer(CHECKING_ID, SAVINGS_ID, Decimal("0.01"))
        return _unchanged_or_flag(second, world, snapshot)

    def transfer_additive_to_limit(svc: AccountServicePort) -> Decision:
        credit(CHECKING_ID, "20000")
        return _both(
            svc.transfer(CHECKING_ID, SAVINGS_ID, Decimal("6000")),
            lambda: svc.transfer(CHECKING_ID, SAVINGS_ID, Decimal("4000")),
        )

    def transfer_additive_over_limit(svc: AccountServicePort) -> Decision:
        credit(CHECKING_ID, "20000")
        return _both(
            svc.transfer(CHECKING_ID, SAVINGS_ID, Decimal("7000")),
            lambda: svc.transfer(CHECKING_ID, SAVINGS_ID, Decimal("3001")),
        )

    def transfer_frozen_source(svc: AccountServicePort) -> Decision:
        account = repo.get_by_id(CHECKING_ID)
        account.credit(Decimal("500"))
        account.freeze()
        return svc.transfer(CHECKING_ID, SAVINGS_ID, Decimal("100"))

    def transfer_savings_uncapped(svc: AccountServicePort) -> Decision:
        credit(SAVINGS_ID, "50000")
        return svc.transfer(SAVINGS_ID, CHECKING_ID, Decimal("15000"))

    def transfer_not_authorized(svc: AccountServicePort) -> Decision:
        credit(CHECKING_ID, "100")
        world.authorizer.approve = False
        return svc.transfer(CHECKING_ID, SAVINGS_ID, Decimal("50"))

    return [
        SpecCase(
            "Deposit: negative rejected",
            lambda svc: svc.deposit(CHECKING_ID, Decimal("-1")),
            expect_allowed=False,
        ),
        SpecCase(
            "Deposit: positive accepted",
            lambda svc: svc.deposit(CHECKING_ID, Decimal("100")),
            expect_allowed=True,
        ),
        SpecCase(
            "Deposit: zero rejected",
            lambda svc: svc.deposit(CHECKING_ID, Decimal("0")),
            expect_allowed=False,
        ),
        SpecCase(
            "Withdraw: exactly balance allowed",
            withdraw_exact_balance,
            expect_allowed=True,
        ),
        SpecCase(
            "Withdraw: overdraft rejected",
            lambda svc: svc.withdraw(CHECKING_ID, Decimal("1")),
            expect_allowed=False,
        ),
        SpecCase(
            "Withdraw: zero rejected",
            lambda svc: svc.withdraw(CHECKING_ID, Decimal("0")),
            expect_allowed=False,
        ),
        SpecCase(
            "Withdraw: frozen account rejected",
            withdraw_frozen,
            expect_allowed=False,
        ),
        SpecCase(
            "Transfer: at daily limit (10,000) allowed",
            transfer_at_limit,
            expect_allowed=True,
        ),
        SpecCase(
            "Transfer: 0.01 over daily limit rejected",
            transfer_over_limit,
            expect_allowed=False,
        ),
        SpecCase(
            "Transfer: 10,000 then 0.01 same day rejected, balances unchanged",
            transfer_after_limit_reached,
            expect_allowed=False,
        ),
        SpecCase(
            "Transfer: 6,000 + 4,000 same day allowed",
            transfer_additive_to_limit,
            expect_allowed=True,
        ),
        SpecCase(
            "Transfer: 7,000 + 3,001 same day rejected",
            transfer_additive_over_limit,
            expect_allowed=False,
        ),
        SpecCase(
            "Transfer: frozen source rejected",
            transfer_frozen_source,
            expect_allowed=False,
        ),
        SpecCase(
            "Transfer: savings has no daily cap",
            transfer_savings_uncapped,
            expect_allowed=True,
        ),
        SpecCase(
            "Transfer: authorizer denial rejected",
            transfer_not_authorized,
            expect_allowed=False,
        ),
    ]


def _execute_case(service: AccountServicePort, case: SpecCase) -> tuple[bool, str]:
    """Run one case; returns (matched expectation, observed reason).

    A scenario that raises counts as a mismatch: a conforming service
    answers every baseline request with a Decision.
    """
    try:
        decision = case.run(service)
    except Exception as e:
        logger.warning(
            f"[FAIL] {case.name} raised {type(e).__name__}: {e}",
            exc_info=True,
        )
        return False, f"raised {type(e).__name__}: {e}"

    matched = decision.allowed == case.expect_allowed
    if matched:
        logger.debug(f"[PASS] {case.name}")
    else:
        logger.debug(
            f"[FAIL] {case.name} -> got: {decision.outcome.value.upper()} "
            f"reason='{decision.reason}'"
        )
    return matched, decision.reason


def run_suite(service: AccountServicePort, cases: Sequence[SpecCase]) -> SuiteResult:
    """Run every case against one service sharing a single world.

    Cases run in list order and observe each other's state changes.
    """
    passed = 0
    failures: list[tuple[str, str]] = []
    for case in cases:
        matched, reason = _execute_case(service, case)
        if matched:
            passed += 1
        else:
            failures.append((case.name, reason))
    return SuiteResult(passed=passed, failed=len(failures), failures=tuple(failures))


class SpecificationSuite:
    """Runs the baseline cases with a fresh world per scenario."""

    def __init__(
        self,
        world_factory: WorldFactory = new_world,
        case_builder: Callable[[SpecWorld], list[SpecCase]] = build_baseline_cases,
    ):
        """Initialize the suite.

        Args:
            world_factory: Builds a freshly seeded world for each scenario.
            case_builder: Builds the scenario list bound to a world.
        """
        self.world_factory = world_factory
        self.case_builder = case_builder

    @property
    def case_names(self) -> list[str]:
        return [case.name for case in self.case_builder(self.world_factory())]

    def run(self, service_factory: ServiceFactory) -> SuiteResult:
        """Run every scenario against a service built for its own world."""
        passed = 0
        failures: list[tuple[str, str]] = []

        for index in range(len(self.case_names)):
            world = self.world_factory()
            case = self.case_builder(world)[index]
            service = service_factory(world)

            matched, reason = _execute_case(service, case)
            if matched:
                passed += 1
            else:
                failures.append((case.name, reason))

        return SuiteResult(passed=passed, failed=len(failures), failures=tuple(failures))
