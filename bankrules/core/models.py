"""Domain models for the bankrules decision engine.

All models in this module use only Python standard library types,
keeping the core domain free of external dependencies.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

# Policy constant: maximum outgoing transfers per calendar day for
# personal checking accounts. A projected total equal to the limit is allowed.
PERSONAL_DAILY_TRANSFER_LIMIT = Decimal("10000")

REASON_OK = "OK"
REASON_DEPOSIT_NOT_POSITIVE = "Deposit amount must be > 0."
REASON_WITHDRAWAL_NOT_POSITIVE = "Withdrawal must be > 0."
REASON_FROZEN = "Account is frozen."
REASON_INSUFFICIENT_FUNDS = "Insufficient funds."
REASON_DAILY_LIMIT_EXCEEDED = "Daily transfer limit exceeded."
REASON_AUTHORIZATION_FAILED = "Authorization failed."
REASON_AUTHORIZATION_UNAVAILABLE = "Authorization service unavailable."


class AccountType(Enum):
    """Closed set of account products."""

    PERSONAL_CHECKING = "personal_checking"
    SAVINGS = "savings"
    BUSINESS_CHECKING = "business_checking"


@dataclass
class Account:
    """A bank account holding a balance and a frozen flag.

    Intentionally mutable: the account service credits and debits it in
    place after rule approval. Test setup may also mutate it directly.
    """

    id: str
    type: AccountType
    balance: Decimal = Decimal("0")
    is_frozen: bool = False

    def __post_init__(self) -> None:
        """Validate account invariants on creation."""
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("id must be a non-empty string")
        if not isinstance(self.type, AccountType):
            raise ValueError(f"type must be an AccountType, got {self.type!r}")
        if isinstance(self.balance, int) and not isinstance(self.balance, bool):
            self.balance = Decimal(self.balance)
        if not isinstance(self.balance, Decimal):
            raise ValueError(
                f"balance must be a Decimal, got {type(self.balance).__name__}"
            )
        if not self.balance.is_finite():
            raise ValueError(f"balance must be finite, got {self.balance}")

    def credit(self, amount: Decimal) -> None:
        """Add amount to the balance."""
        self.balance += amount

    def debit(self, amount: Decimal) -> None:
        """Subtract amount from the balance."""
        self.balance -= amount

    def freeze(self) -> None:
        self.is_frozen = True

    def unfreeze(self) -> None:
        self.is_frozen = False


class Outcome(Enum):
    """Result of a decision or an orchestrated operation.

    - ALLOWED: the rule set approved and (for services) state was committed
    - DENIED: a policy or authorization denial; nothing was committed
    - PENDING: a collaborator was unavailable; nothing was committed and
      the request may be retried later
    """

    ALLOWED = "allowed"
    DENIED = "denied"
    PENDING = "pending"


@dataclass(frozen=True)
class Decision:
    """An outcome plus the human-readable reason behind it.

    The reason is mandatory even on success (canonically "OK").
    """

    outcome: Outcome
    reason: str

    def __post_init__(self) -> None:
        """Validate decision invariants on creation."""
        if not self.reason:
            raise ValueError("reason must be a non-empty string")

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOWED

    @classmethod
    def allow(cls, reason: str = REASON_OK) -> "Decision":
        return cls(Outcome.ALLOWED, reason)

    @classmethod
    def deny(cls, reason: str) -> "Decision":
        return cls(Outcome.DENIED, reason)

    @classmethod
    def pending(cls, reason: str) -> "Decision":
        return cls(Outcome.PENDING, reason)
