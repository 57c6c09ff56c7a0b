"""
Data model shared by the login and consent flows.

Requests are read-only snapshots fetched from the admin API. Accept and deny
payloads are the tagged variants sent back; each knows its own wire shape
(snake_case JSON, as the admin API expects).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from .exceptions import ProviderError


class FlowKind(str, Enum):
    LOGIN = "login"
    CONSENT = "consent"

    @property
    def challenge_param(self) -> str:
        """Query parameter the authorization server uses for this flow's challenge."""
        return f"{self.value}_challenge"


def _ordered_set(data: dict, key: str, kind: str) -> tuple[str, ...]:
    """Read a list of strings as an ordered set; anything else is a malformed response."""
    values = data.get(key)
    if values is None:
        return ()
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ProviderError(f"Malformed {kind} request: {key} is not a list of strings")
    return tuple(dict.fromkeys(values))


def _skip(data: dict, kind: str) -> bool:
    skip = data.get("skip", False)
    if not isinstance(skip, bool):
        raise ProviderError(f"Malformed {kind} request: skip is not a boolean")
    return skip


def _client(data: dict, kind: str) -> dict:
    client = data.get("client") or {}
    if not isinstance(client, dict):
        raise ProviderError(f"Malformed {kind} request: client is not an object")
    return client


@dataclass(frozen=True)
class LoginRequest:
    challenge: str
    skip: bool
    subject: str
    requested_scope: tuple[str, ...] = ()
    requested_access_token_audience: tuple[str, ...] = ()
    client: dict = field(default_factory=dict)
    request_url: str = ""

    @classmethod
    def from_payload(cls, challenge: str, data: dict) -> "LoginRequest":
        return cls(
            challenge=challenge,
            skip=_skip(data, "login"),
            subject=str(data.get("subject") or ""),
            requested_scope=_ordered_set(data, "requested_scope", "login"),
            requested_access_token_audience=_ordered_set(data, "requested_access_token_audience", "login"),
            client=_client(data, "login"),
            request_url=str(data.get("request_url") or ""),
        )


@dataclass(frozen=True)
class ConsentRequest:
    challenge: str
    skip: bool
    subject: str
    requested_scope: tuple[str, ...] = ()
    requested_access_token_audience: tuple[str, ...] = ()
    client: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, challenge: str, data: dict) -> "ConsentRequest":
        return cls(
            challenge=challenge,
            skip=_skip(data, "consent"),
            subject=str(data.get("subject") or ""),
            requested_scope=_ordered_set(data, "requested_scope", "consent"),
            requested_access_token_audience=_ordered_set(data, "requested_access_token_audience", "consent"),
            client=_client(data, "consent"),
        )


@dataclass(frozen=True)
class Session:
    """Claims for the access token (introspection) and the ID token."""

    access_token: dict = field(default_factory=dict)
    id_token: dict = field(default_factory=dict)

    def to_payload(self) -> dict:
        return {"access_token": dict(self.access_token), "id_token": dict(self.id_token)}


@dataclass(frozen=True)
class LoginAccept:
    subject: str
    remember: Optional[bool] = None
    remember_for: Optional[int] = None
    # Authentication level; passed through untouched, never set by this service.
    acr: Optional[str] = None

    def to_payload(self) -> dict:
        payload: dict[str, Any] = {"subject": self.subject}
        if self.remember is not None:
            payload["remember"] = self.remember
        if self.remember_for is not None:
            payload["remember_for"] = self.remember_for
        if self.acr is not None:
            payload["acr"] = self.acr
        return payload


@dataclass(frozen=True)
class ConsentAccept:
    grant_scope: tuple[str, ...]
    grant_access_token_audience: tuple[str, ...]
    session: Session = field(default_factory=Session)
    remember: Optional[bool] = None
    remember_for: Optional[int] = None

    def to_payload(self) -> dict:
        payload: dict[str, Any] = {
            "grant_scope": list(self.grant_scope),
            "grant_access_token_audience": list(self.grant_access_token_audience),
            "session": self.session.to_payload(),
        }
        if self.remember is not None:
            payload["remember"] = self.remember
        if self.remember_for is not None:
            payload["remember_for"] = self.remember_for
        return payload


@dataclass(frozen=True)
class Deny:
    error: str = "access_denied"
    error_description: str = "The resource owner denied the request"

    def to_payload(self) -> dict:
        return {"error": self.error, "error_description": self.error_description}


Decision = Union[LoginAccept, ConsentAccept, Deny]
AcceptPayload = Union[LoginAccept, ConsentAccept]


@dataclass(frozen=True)
class RedirectResult:
    redirect_to: str


@dataclass(frozen=True)
class LoginSubmission:
    """Fields posted by the login form."""

    challenge: str
    email: str = ""
    password: str = ""
    submit: str = ""
    remember: bool = False


@dataclass(frozen=True)
class ConsentSubmission:
    """Fields posted by the consent form; grant_scope is already normalized."""

    challenge: str
    grant_scope: tuple[str, ...] = ()
    submit: str = ""
    remember: bool = False
