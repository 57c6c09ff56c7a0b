"""
ORY Hydra admin API client.

Uses httpx for the admin calls. When admin client credentials are configured
the transport is an Authlib AsyncOAuth2Client (client_credentials grant), so
every call carries a bearer token that Authlib refreshes when it expires.
Any failure surfaces as ProviderError; nothing is retried.
"""

import logging
from typing import Any, Optional, Union

import httpx
from authlib.integrations.httpx_client import AsyncOAuth2Client, OAuthError

from .exceptions import MissingChallenge, ProviderError
from .models import (
    AcceptPayload,
    ConsentRequest,
    Deny,
    FlowKind,
    LoginRequest,
    RedirectResult,
)
from .protocol import AdminClient
from .settings import Settings

logger = logging.getLogger(__name__)

REQUESTS_PATH = "/admin/oauth2/auth/requests"
CLIENTS_PATH = "/admin/clients"


class HydraAdminClient(AdminClient):
    """AdminClient backed by Hydra's /admin/oauth2/auth/requests endpoints."""

    def __init__(self, http_client: httpx.AsyncClient):
        self._http = http_client

    async def fetch_request(self, kind: FlowKind, challenge: str) -> Union[LoginRequest, ConsentRequest]:
        """GET the pending request; malformed bodies raise ProviderError."""
        data = await self._call("GET", f"{REQUESTS_PATH}/{kind.value}", kind, challenge)
        if not isinstance(data, dict):
            raise ProviderError(f"Malformed {kind.value} request for challenge")
        if kind is FlowKind.LOGIN:
            return LoginRequest.from_payload(challenge, data)
        return ConsentRequest.from_payload(challenge, data)

    async def accept(self, kind: FlowKind, challenge: str, payload: AcceptPayload) -> RedirectResult:
        """PUT the accept payload and return the redirect_to URL."""
        data = await self._call(
            "PUT", f"{REQUESTS_PATH}/{kind.value}/accept", kind, challenge, json=payload.to_payload()
        )
        return _redirect_result(data)

    async def reject(self, kind: FlowKind, challenge: str, payload: Deny) -> RedirectResult:
        """PUT the deny payload and return the redirect_to URL."""
        data = await self._call(
            "PUT", f"{REQUESTS_PATH}/{kind.value}/reject", kind, challenge, json=payload.to_payload()
        )
        return _redirect_result(data)

    async def list_clients(self, limit: int = 10) -> list[dict]:
        """Return the first page of registered OAuth2 clients."""
        data = await self._request("GET", CLIENTS_PATH, params={"page_size": limit})
        if not isinstance(data, list):
            raise ProviderError("Malformed client list")
        return data

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def _call(
        self, method: str, path: str, kind: FlowKind, challenge: str, json: Optional[dict] = None
    ) -> Any:
        if not challenge:
            raise MissingChallenge(kind.value)
        return await self._request(method, path, params={kind.challenge_param: challenge}, json=json)

    async def _request(self, method: str, path: str, params: dict, json: Optional[dict] = None) -> Any:
        try:
            await self._ensure_token()
            response = await self._http.request(method, path, params=params, json=json)
        except OAuthError as e:
            raise ProviderError(f"Admin token request failed: {e}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Admin API {method} {path} failed: {e}") from e

        logger.debug("admin %s %s -> %d", method, path, response.status_code)
        if response.is_error:
            raise ProviderError(
                f"Admin API {method} {path} returned {response.status_code}",
                status=response.status_code,
                body=response.text,
            )
        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                f"Admin API {method} {path} returned a non-JSON body",
                status=response.status_code,
                body=response.text,
            ) from e

    async def _ensure_token(self) -> None:
        # Authlib refreshes expired client_credentials tokens itself; only the first one is ours to fetch.
        if isinstance(self._http, AsyncOAuth2Client) and not self._http.token:
            await self._http.fetch_token()


def _redirect_result(data: Any) -> RedirectResult:
    redirect_to = data.get("redirect_to") if isinstance(data, dict) else None
    if not isinstance(redirect_to, str) or not redirect_to:
        raise ProviderError("Admin API response carried no redirect_to")
    return RedirectResult(redirect_to=redirect_to)


def create_admin_client(settings: Settings) -> HydraAdminClient:
    """Build the admin client; authenticated with client credentials when configured."""
    if settings.admin_client_id:
        http_client = AsyncOAuth2Client(
            client_id=settings.admin_client_id,
            client_secret=settings.admin_client_secret,
            scope=settings.admin_scope,
            token_endpoint=settings.admin_token_url,
            grant_type="client_credentials",
            base_url=settings.hydra_admin_url,
            timeout=settings.admin_timeout,
        )
    else:
        http_client = httpx.AsyncClient(base_url=settings.hydra_admin_url, timeout=settings.admin_timeout)
    return HydraAdminClient(http_client)
