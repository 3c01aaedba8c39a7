"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeAccountRepository: In-memory accounts and daily totals, with call tracking
- FakeAuthorizer: Configurable approve/deny/unavailable transfer gate
- FakeClock: Controllable current time
"""

from .authorizer import FakeAuthorizer
from .clock import FakeClock
from .repository import FakeAccountRepository

__all__ = [
    "FakeAccountRepository",
    "FakeAuthorizer",
    "FakeClock",
]
