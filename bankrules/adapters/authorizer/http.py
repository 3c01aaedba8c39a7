"""HTTP transfer authorizer adapter.

Implements AuthorizerPort by asking a remote fraud/compliance service to
approve each transfer. The service is expected to answer

    POST {base_url}/transfers/authorize
    {"from_account_id": ..., "to_account_id": ..., "amount": "..."}

with a JSON body of the form {"approved": true|false}, or with 403 when the
transfer is blocked outright.

Any other failure to obtain a verdict (timeout, connection error, any other
4xx or 5xx status, malformed body) is raised as AuthorizerUnavailableError
so the account service can report the transfer as pending instead of
approved or denied.
"""

import logging
from decimal import Decimal
from typing import Any

import httpx

from bankrules.core.exceptions import AuthorizerUnavailableError
from bankrules.core.models import Account
from bankrules.core.ports import AuthorizerPort

logger = logging.getLogger(__name__)


class HTTPTransferAuthorizer(AuthorizerPort):
    """Remote compliance gate reached over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        api_key: str = "",
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the HTTP authorizer.

        Args:
            base_url: Base URL of the authorization service.
            timeout_seconds: Per-request timeout.
            api_key: Optional bearer token sent with every request.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self.client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout_seconds,
            headers=headers,
            transport=transport,
        )

    def __enter__(self) -> "HTTPTransferAuthorizer":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the httpx client and clean up resources."""
        self.client.close()

    def authorize_transfer(
        self, from_account: Account, to_account: Account, amount: Decimal
    ) -> bool:
        """Ask the remote service whether this transfer may proceed.

        Returns:
            True if the service approved the transfer, False if it denied it.
            A 403 response is the service's explicit "blocked" verdict.

        Raises:
            AuthorizerUnavailableError: If no verdict could be obtained.
        """
        payload = {
            "from_account_id": from_account.id,
            "to_account_id": to_account.id,
            "amount": str(amount),
        }

        try:
            response = self.client.post("/transfers/authorize", json=payload)
        except httpx.TimeoutException as e:
            raise AuthorizerUnavailableError(
                f"Authorization service timed out: {e}"
            ) from e
        except httpx.HTTPError as e:
            raise AuthorizerUnavailableError(
                f"Authorization service unreachable: {e}"
            ) from e

        if response.status_code == 403:
            logger.info(
                "Authorization service blocked transfer",
                extra={"from_account_id": from_account.id, "status_code": response.status_code},
            )
            return False

        if response.status_code >= 400:
            raise AuthorizerUnavailableError(
                f"Authorization service returned {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise AuthorizerUnavailableError(
                "Authorization service returned a non-JSON body"
            ) from e

        approved = data.get("approved") if isinstance(data, dict) else None
        if not isinstance(approved, bool):
            raise AuthorizerUnavailableError(
                f"Authorization service returned no verdict: {data!r}"
            )
        return approved
