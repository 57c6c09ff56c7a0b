"""
Protocols for the collaborators the flows depend on.

Implementations (e.g. HydraAdminClient, StaticCredentialValidator) are injected
into the flows so that tests and real deployments can swap them freely.
"""

from typing import Protocol, Union, runtime_checkable

from .models import (
    AcceptPayload,
    ConsentRequest,
    Deny,
    FlowKind,
    LoginRequest,
    RedirectResult,
)


@runtime_checkable
class AdminClient(Protocol):
    """Admin API of the authorization server (fetch, accept, reject per flow)."""

    async def fetch_request(self, kind: FlowKind, challenge: str) -> Union[LoginRequest, ConsentRequest]:
        """Fetch the pending login or consent request for a challenge."""
        ...

    async def accept(self, kind: FlowKind, challenge: str, payload: AcceptPayload) -> RedirectResult:
        """Accept the challenge; return where the browser goes next."""
        ...

    async def reject(self, kind: FlowKind, challenge: str, payload: Deny) -> RedirectResult:
        """Reject the challenge; return where the browser goes next."""
        ...

    async def list_clients(self, limit: int = 10) -> list[dict]:
        """Return the first page of registered OAuth2 clients (diagnostics only)."""
        ...


@runtime_checkable
class CredentialValidator(Protocol):
    """Checks submitted identity claims against a user directory."""

    async def validate(self, identity: str, secret: str) -> bool:
        """Return True if the identity/secret pair is valid. No other side effects."""
        ...
