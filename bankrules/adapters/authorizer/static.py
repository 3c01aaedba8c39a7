"""Static authorizer adapter.

Implements AuthorizerPort with a fixed verdict. Used by hosts that have
no compliance gate and by the specification worlds.
"""

from decimal import Decimal

from bankrules.core.models import Account
from bankrules.core.ports import AuthorizerPort


class StaticAuthorizer(AuthorizerPort):
    """Approves (or denies) every transfer."""

    def __init__(self, approve: bool = True):
        self.approve = approve

    def authorize_transfer(
        self, from_account: Account, to_account: Account, amount: Decimal
    ) -> bool:
        return self.approve
