"""Transfer authorizer adapters.

- static: fixed approve/deny verdict
- http: remote fraud/compliance service reached with httpx
"""

from .http import HTTPTransferAuthorizer
from .static import StaticAuthorizer

__all__ = ["HTTPTransferAuthorizer", "StaticAuthorizer"]
