"""Account repository adapters."""

from .memory import InMemoryAccountRepository

__all__ = ["InMemoryAccountRepository"]
