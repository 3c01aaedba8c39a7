"""Unit tests for domain models and amount validation."""

from decimal import Decimal

import pytest

from bankrules.core.exceptions import (
    AccountNotFoundError,
    BankRulesError,
    InvalidAmountError,
    ensure_amount,
)
from bankrules.core.models import Account, AccountType, Decision, Outcome


class TestAccount:
    def test_defaults(self) -> None:
        account = Account("C1", AccountType.PERSONAL_CHECKING)
        assert account.balance == Decimal("0")
        assert account.is_frozen is False

    def test_credit_and_debit(self) -> None:
        account = Account("C1", AccountType.SAVINGS, Decimal("10"))
        account.credit(Decimal("5.50"))
        account.debit(Decimal("20"))
        assert account.balance == Decimal("-4.50")

    def test_freeze_and_unfreeze(self) -> None:
        account = Account("C1", AccountType.SAVINGS)
        account.freeze()
        assert account.is_frozen
        account.unfreeze()
        assert not account.is_frozen

    def test_int_balance_converted_to_decimal(self) -> None:
        account = Account("C1", AccountType.SAVINGS, 25)  # type: ignore[arg-type]
        assert isinstance(account.balance, Decimal)
        assert account.balance == Decimal("25")

    @pytest.mark.parametrize("account_id", ["", "   "])
    def test_rejects_blank_id(self, account_id: str) -> None:
        with pytest.raises(ValueError, match="id"):
            Account(account_id, AccountType.SAVINGS)

    @pytest.mark.parametrize("account_id", [None, 42])
    def test_rejects_non_string_id(self, account_id) -> None:
        with pytest.raises(ValueError, match="id"):
            Account(account_id, AccountType.SAVINGS)  # type: ignore[arg-type]

    @pytest.mark.parametrize("balance", ["NaN", "sNaN", "Infinity", "-Infinity"])
    def test_rejects_non_finite_balance(self, balance: str) -> None:
        with pytest.raises(ValueError, match="finite"):
            Account("C1", AccountType.SAVINGS, Decimal(balance))

    def test_rejects_float_balance(self) -> None:
        with pytest.raises(ValueError, match="balance"):
            Account("C1", AccountType.SAVINGS, 1.5)  # type: ignore[arg-type]

    def test_rejects_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="type"):
            Account("C1", "savings")  # type: ignore[arg-type]


class TestDecision:
    def test_allow_defaults_to_ok(self) -> None:
        decision = Decision.allow()
        assert decision.allowed
        assert decision.outcome is Outcome.ALLOWED
        assert decision.reason == "OK"

    def test_deny_and_pending_are_not_allowed(self) -> None:
        assert not Decision.deny("no").allowed
        assert not Decision.pending("later").allowed
        assert Decision.pending("later").outcome is Outcome.PENDING

    def test_reason_is_mandatory(self) -> None:
        with pytest.raises(ValueError):
            Decision(Outcome.ALLOWED, "")

    def test_is_immutable(self) -> None:
        decision = Decision.allow()
        with pytest.raises(AttributeError):
            decision.reason = "changed"  # type: ignore[misc]


class TestEnsureAmount:
    @pytest.mark.parametrize(
        "value,expected",
        [(Decimal("1.25"), Decimal("1.25")), (5, Decimal("5")), (-3, Decimal("-3"))],
    )
    def test_accepts_decimal_and_int(self, value, expected) -> None:
        assert ensure_amount(value) == expected

    @pytest.mark.parametrize(
        "value",
        [1.5, True, "10", None, Decimal("NaN"), Decimal("Infinity"), Decimal("-Infinity")],
    )
    def test_rejects_other_values(self, value) -> None:
        with pytest.raises(InvalidAmountError):
            ensure_amount(value)

    def test_error_hierarchy(self) -> None:
        assert issubclass(InvalidAmountError, ValueError)
        assert issubclass(InvalidAmountError, BankRulesError)
        assert issubclass(AccountNotFoundError, LookupError)
        assert AccountNotFoundError("X1").account_id == "X1"
