"""
Response builder: assembles accept/deny payloads for both flows.

The skip variants echo what the authorization server already decided and leave
remember fields unset so its defaults apply. The interactive variants carry the
user's choice and the configured remember policy.
"""

from typing import Iterable, Optional, Union

from .models import (
    ConsentAccept,
    ConsentRequest,
    ConsentSubmission,
    Deny,
    LoginAccept,
    LoginRequest,
    LoginSubmission,
    Session,
)

DENY_ACTION = "Deny access"


def normalize_scope(value: Union[str, Iterable[str], None]) -> tuple[str, ...]:
    """
    Coerce a submitted grant_scope into an ordered tuple of unique scopes.

    A single checkbox arrives as a scalar, several as a list, none as nothing;
    all three end up in the same shape. An absent field means "grant nothing".
    """
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    return tuple(dict.fromkeys(v for v in value if v))


def is_deny(submit: Optional[str]) -> bool:
    """True only for the exact deny button value."""
    return submit == DENY_ACTION


def access_denied() -> Deny:
    """The fixed deny payload used by both flows."""
    return Deny()


def skipped_login(request: LoginRequest) -> LoginAccept:
    """Accept the subject the authorization server already authenticated."""
    return LoginAccept(subject=request.subject)


def accepted_login(submission: LoginSubmission, remember_for: int) -> LoginAccept:
    """Accept the submitted identity with the remember policy."""
    return LoginAccept(
        subject=submission.email,
        remember=submission.remember,
        remember_for=remember_for,
    )


def skipped_consent(request: ConsentRequest) -> ConsentAccept:
    """Echo the requested scope and audience; the authorization server already validated both."""
    return ConsentAccept(
        grant_scope=request.requested_scope,
        grant_access_token_audience=request.requested_access_token_audience,
    )


def accepted_consent(
    submission: ConsentSubmission,
    request: ConsentRequest,
    remember_for: int,
    session: Optional[Session] = None,
) -> ConsentAccept:
    """Audience always comes from the fetched request, never from the form."""
    return ConsentAccept(
        grant_scope=submission.grant_scope,
        grant_access_token_audience=request.requested_access_token_audience,
        session=session or Session(),
        remember=submission.remember,
        remember_for=remember_for,
    )
