"""Unit tests for AccountService orchestration.

Tests verify that the service consults the authorizer and rule set in the
right order, commits state only on allow, maps an unavailable authorizer
to a pending outcome, and raises on precondition failures.
"""

from datetime import date
from decimal import Decimal

import pytest

from bankrules.core.account_service import AccountService
from bankrules.core.exceptions import (
    AccountNotFoundError,
    InvalidAmountError,
    InvalidTransferError,
)
from bankrules.core.models import (
    REASON_AUTHORIZATION_FAILED,
    REASON_AUTHORIZATION_UNAVAILABLE,
    REASON_DAILY_LIMIT_EXCEEDED,
    REASON_DEPOSIT_NOT_POSITIVE,
    REASON_FROZEN,
    REASON_INSUFFICIENT_FUNDS,
    Account,
    AccountType,
    Decision,
    Outcome,
)
from bankrules.core.ports import RuleSetPort
from bankrules.tests.fakes import FakeAccountRepository, FakeAuthorizer, FakeClock

TODAY = date(2026, 1, 15)

# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def checking() -> Account:
    return Account("C1", AccountType.PERSONAL_CHECKING, Decimal("0"))


@pytest.fixture
def savings() -> Account:
    return Account("S1", AccountType.SAVINGS, Decimal("0"))


@pytest.fixture
def repository(checking: Account, savings: Account) -> FakeAccountRepository:
    return FakeAccountRepository(checking, savings)


@pytest.fixture
def authorizer() -> FakeAuthorizer:
    return FakeAuthorizer()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(
    repository: FakeAccountRepository, authorizer: FakeAuthorizer, clock: FakeClock
) -> AccountService:
    return AccountService(repository, authorizer, clock)


class RecordingRuleSet(RuleSetPort):
    """Rule set that records calls and returns a fixed decision."""

    def __init__(self, decision: Decision):
        self.decision = decision
        self.transfer_calls: list[tuple[str, str, Decimal, date, Decimal]] = []

    def can_deposit(self, account, amount):
        return self.decision

    def can_withdraw(self, account, amount):
        return self.decision

    def can_transfer(self, from_account, to_account, amount, today, todays_total):
        self.transfer_calls.append(
            (from_account.id, to_account.id, amount, today, todays_total)
        )
        return self.decision


# ============================================================================
# Deposit / Withdraw
# ============================================================================


class TestDeposit:
    def test_allowed_deposit_credits_and_saves(self, service, repository, checking):
        decision = service.deposit("C1", Decimal("250"))

        assert decision.allowed
        assert decision.reason == "OK"
        assert checking.balance == Decimal("250")
        assert repository.saved_accounts == [checking]

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1")])
    def test_denied_deposit_commits_nothing(self, service, repository, checking, amount):
        decision = service.deposit("C1", amount)

        assert decision.outcome is Outcome.DENIED
        assert decision.reason == REASON_DEPOSIT_NOT_POSITIVE
        assert checking.balance == Decimal("0")
        assert not repository.committed

    def test_int_amount_accepted(self, service, checking):
        assert service.deposit("C1", 5).allowed
        assert checking.balance == Decimal("5")

    def test_unknown_account_raises(self, service):
        with pytest.raises(AccountNotFoundError):
            service.deposit("missing", Decimal("10"))

    @pytest.mark.parametrize("amount", [10.0, "10", Decimal("NaN"), True])
    def test_malformed_amount_raises(self, service, repository, amount):
        with pytest.raises(InvalidAmountError):
            service.deposit("C1", amount)
        assert repository.get_by_id_calls == []

    def test_returns_rule_set_reason(self, repository, authorizer, clock, checking):
        rules = RecordingRuleSet(Decision.allow("Approved by custom policy"))
        service = AccountService(repository, authorizer, clock, rules)

        decision = service.deposit("C1", Decimal("1"))
        assert decision.reason == "Approved by custom policy"
        assert checking.balance == Decimal("1")


class TestWithdraw:
    def test_allowed_withdraw_debits_and_saves(self, service, repository, checking):
        checking.credit(Decimal("100"))

        decision = service.withdraw("C1", Decimal("100"))

        assert decision.allowed
        assert checking.balance == Decimal("0")
        assert repository.saved_accounts == [checking]

    def test_overdraft_denied(self, service, repository, checking):
        decision = service.withdraw("C1", Decimal("1"))
        assert decision.reason == REASON_INSUFFICIENT_FUNDS
        assert not repository.committed

    def test_frozen_denied(self, service, repository, checking):
        checking.credit(Decimal("10"))
        checking.freeze()

        decision = service.withdraw("C1", Decimal("1"))

        assert decision.reason == REASON_FROZEN
        assert checking.balance == Decimal("10")
        assert not repository.committed


# ============================================================================
# Transfer
# ============================================================================


class TestTransfer:
    def test_allowed_transfer_commits_all_effects(
        self, service, repository, checking, savings
    ):
        checking.credit(Decimal("20000"))

        decision = service.transfer("C1", "S1", Decimal("10000"))

        assert decision.allowed
        assert checking.balance == Decimal("10000")
        assert savings.balance == Decimal("10000")
        assert repository.get_total_transfers_for("C1", TODAY) == Decimal("10000")
        assert repository.added_transfers == [("C1", TODAY, Decimal("10000"))]
        assert repository.saved_accounts == [checking, savings]

    def test_end_to_end_daily_limit(self, service, repository, checking, savings):
        assert service.deposit("C1", Decimal("20000")).allowed
        assert service.transfer("C1", "S1", Decimal("10000")).allowed

        decision = service.transfer("C1", "S1", Decimal("0.01"))

        assert decision.outcome is Outcome.DENIED
        assert decision.reason == REASON_DAILY_LIMIT_EXCEEDED
        assert checking.balance == Decimal("10000")
        assert savings.balance == Decimal("10000")
        assert repository.get_total_transfers_for("C1", TODAY) == Decimal("10000")

    def test_two_transfers_summing_to_limit_allowed(self, service, repository, checking):
        checking.credit(Decimal("20000"))

        assert service.transfer("C1", "S1", Decimal("6000")).allowed
        assert service.transfer("C1", "S1", Decimal("4000")).allowed
        assert repository.get_total_transfers_for("C1", TODAY) == Decimal("10000")

    def test_cumulative_over_limit_denied(self, service, checking):
        checking.credit(Decimal("20000"))

        assert service.transfer("C1", "S1", Decimal("7000")).allowed
        decision = service.transfer("C1", "S1", Decimal("3001"))
        assert decision.reason == REASON_DAILY_LIMIT_EXCEEDED
        assert checking.balance == Decimal("13000")

    def test_new_day_starts_from_zero(self, service, repository, clock, checking):
        checking.credit(Decimal("30000"))
        assert service.transfer("C1", "S1", Decimal("10000")).allowed

        clock.advance(days=1)

        assert service.transfer("C1", "S1", Decimal("10000")).allowed
        assert repository.get_total_transfers_for("C1", TODAY) == Decimal("10000")
        assert repository.get_total_transfers_for("C1", date(2026, 1, 16)) == Decimal("10000")

    def test_authorizer_denial_precedes_rules(
        self, repository, authorizer, clock, checking
    ):
        rules = RecordingRuleSet(Decision.allow())
        service = AccountService(repository, authorizer, clock, rules)
        authorizer.approve = False
        checking.credit(Decimal("100"))

        decision = service.transfer("C1", "S1", Decimal("50"))

        assert decision.outcome is Outcome.DENIED
        assert decision.reason == REASON_AUTHORIZATION_FAILED
        assert rules.transfer_calls == []
        assert not repository.committed
        assert "get_total_transfers_for" not in repository.calls

    def test_authorizer_unavailable_is_pending(
        self, service, repository, authorizer, checking, savings
    ):
        authorizer.set_unavailable()
        checking.credit(Decimal("100"))

        decision = service.transfer("C1", "S1", Decimal("50"))

        assert decision.outcome is Outcome.PENDING
        assert decision.reason == REASON_AUTHORIZATION_UNAVAILABLE
        assert not decision.allowed
        assert checking.balance == Decimal("100")
        assert savings.balance == Decimal("0")
        assert not repository.committed

    def test_unexpected_authorizer_error_propagates(self, service, repository, authorizer):
        authorizer.set_error(RuntimeError("compliance service crashed"))

        with pytest.raises(RuntimeError, match="compliance service crashed"):
            service.transfer("C1", "S1", Decimal("1"))
        assert not repository.committed

    def test_authorizer_receives_accounts_and_amount(self, service, authorizer, checking):
        checking.credit(Decimal("10"))
        service.transfer("C1", "S1", Decimal("5"))
        assert authorizer.calls == [("C1", "S1", Decimal("5"))]

    def test_rules_receive_today_and_running_total(
        self, repository, authorizer, clock
    ):
        rules = RecordingRuleSet(Decision.deny("nope"))
        service = AccountService(repository, authorizer, clock, rules)
        repository.set_daily_total("C1", TODAY, Decimal("1234"))

        decision = service.transfer("C1", "S1", Decimal("10"))

        assert decision.reason == "nope"
        assert rules.transfer_calls == [("C1", "S1", Decimal("10"), TODAY, Decimal("1234"))]
        assert not repository.committed

    def test_denied_transfer_propagates_withdraw_reason(self, service, checking):
        checking.credit(Decimal("100"))
        checking.freeze()

        decision = service.transfer("C1", "S1", Decimal("10"))
        assert decision.reason == REASON_FROZEN

    def test_same_account_transfer_raises(self, service, repository):
        with pytest.raises(InvalidTransferError):
            service.transfer("C1", "C1", Decimal("10"))
        assert repository.get_by_id_calls == []

    def test_unknown_destination_raises_before_authorization(self, service, authorizer):
        with pytest.raises(AccountNotFoundError):
            service.transfer("C1", "missing", Decimal("10"))
        assert authorizer.calls == []

    def test_operation_order(self, service, repository, checking):
        checking.credit(Decimal("100"))
        repository.reset_tracking()

        service.transfer("C1", "S1", Decimal("10"))

        assert repository.calls == [
            "get_by_id",
            "get_by_id",
            "get_total_transfers_for",
            "add_daily_transfer",
            "save",
            "save",
        ]
