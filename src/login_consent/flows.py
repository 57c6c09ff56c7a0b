"""
Login and consent resolution as explicit state machines.

The decide_* functions are pure: they map a fetched request or a form
submission to a Transition (next state, optional outbound decision, optional
render context). LoginFlow and ConsentFlow drive them, issuing the admin calls
strictly in sequence: fetch, decide, then accept or reject. A transition with
a decision ends in a Redirect to the URL the admin API returned; one without
ends in a Render of the interactive form.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from . import payloads
from .exceptions import MissingChallenge
from .models import (
    ConsentRequest,
    ConsentSubmission,
    Decision,
    Deny,
    FlowKind,
    LoginRequest,
    LoginSubmission,
)
from .protocol import AdminClient, CredentialValidator

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "The username / password combination is not correct"


class LoginState(str, Enum):
    FETCHED = "fetched"
    SKIPPABLE = "skippable"
    INTERACTIVE_REQUIRED = "interactive_required"
    USER_DENIED = "user_denied"
    USER_INVALID = "user_invalid"
    USER_ACCEPTED = "user_accepted"


class ConsentState(str, Enum):
    FETCHED = "fetched"
    SKIPPABLE = "skippable"
    INTERACTIVE_REQUIRED = "interactive_required"
    USER_DENIED = "user_denied"
    USER_ACCEPTED = "user_accepted"
    # Consent has no credential check; kept for parity with LoginState.
    USER_INVALID = "user_invalid"


@dataclass(frozen=True)
class Transition:
    state: Union[LoginState, ConsentState]
    decision: Optional[Decision] = None
    context: Optional[dict] = None


@dataclass(frozen=True)
class Redirect:
    url: str


@dataclass(frozen=True)
class Render:
    template: str
    context: dict = field(default_factory=dict)


Outcome = Union[Redirect, Render]


def decide_login(request: LoginRequest) -> Transition:
    """Skip straight to accept when the server already knows the user, else show the form."""
    if request.skip:
        return Transition(LoginState.SKIPPABLE, payloads.skipped_login(request))
    return Transition(LoginState.INTERACTIVE_REQUIRED, context={"challenge": request.challenge})


def decide_login_submission(submission: LoginSubmission, valid: bool, remember_for: int) -> Transition:
    """valid is ignored for a deny; the credential check never runs in that case."""
    if payloads.is_deny(submission.submit):
        return Transition(LoginState.USER_DENIED, payloads.access_denied())
    if not valid:
        return Transition(
            LoginState.USER_INVALID,
            context={"challenge": submission.challenge, "error": INVALID_CREDENTIALS_MESSAGE},
        )
    return Transition(LoginState.USER_ACCEPTED, payloads.accepted_login(submission, remember_for))


def decide_consent(request: ConsentRequest) -> Transition:
    """Grant everything requested on skip, else show the consent form."""
    if request.skip:
        return Transition(ConsentState.SKIPPABLE, payloads.skipped_consent(request))
    return Transition(
        ConsentState.INTERACTIVE_REQUIRED,
        context={
            "challenge": request.challenge,
            "requested_scope": list(request.requested_scope),
            "user": request.subject,
            "client": request.client,
        },
    )


def decide_consent_submission(submission: ConsentSubmission) -> Transition:
    """
    Classify a consent POST. A deny is terminal; an accept has no decision yet
    because the audience must first be re-fetched (see accept_consent_submission).
    """
    if payloads.is_deny(submission.submit):
        return Transition(ConsentState.USER_DENIED, payloads.access_denied())
    return Transition(ConsentState.USER_ACCEPTED)


def accept_consent_submission(
    submission: ConsentSubmission, request: ConsentRequest, remember_for: int
) -> Transition:
    """Accept with the user's scopes and the re-fetched request's audience."""
    return Transition(
        ConsentState.USER_ACCEPTED,
        payloads.accepted_consent(submission, request, remember_for),
    )


def _short(challenge: str) -> str:
    return challenge[:8] + "..." if len(challenge) > 8 else challenge


class _Flow:
    kind: FlowKind
    template: str

    def __init__(self, admin: AdminClient, remember_for: int, action: str = ""):
        self.admin = admin
        self.remember_for = remember_for
        self.action = action

    def _require(self, challenge: Optional[str]) -> str:
        if not challenge:
            raise MissingChallenge(self.kind.value)
        return challenge

    async def _finish(self, challenge: str, transition: Transition) -> Outcome:
        logger.info("%s %s: %s", self.kind.value, _short(challenge), transition.state.value)
        if transition.decision is None:
            return Render(self.template, {**(transition.context or {}), "action": self.action})
        if isinstance(transition.decision, Deny):
            result = await self.admin.reject(self.kind, challenge, transition.decision)
        else:
            result = await self.admin.accept(self.kind, challenge, transition.decision)
        return Redirect(result.redirect_to)


class LoginFlow(_Flow):
    """Drives the login state machine against the admin API and a credential validator."""

    kind = FlowKind.LOGIN
    template = "login.html"

    def __init__(
        self, admin: AdminClient, validator: CredentialValidator, remember_for: int, action: str = ""
    ):
        super().__init__(admin, remember_for, action)
        self.validator = validator

    async def begin(self, challenge: Optional[str]) -> Outcome:
        """Handle the GET redirect from the authorization server."""
        challenge = self._require(challenge)
        request = await self.admin.fetch_request(self.kind, challenge)
        return await self._finish(challenge, decide_login(request))

    async def submit(self, submission: LoginSubmission) -> Outcome:
        """Handle the form POST."""
        challenge = self._require(submission.challenge)
        valid = False
        if not payloads.is_deny(submission.submit):
            valid = await self.validator.validate(submission.email, submission.password)
        transition = decide_login_submission(submission, valid, self.remember_for)
        return await self._finish(challenge, transition)


class ConsentFlow(_Flow):
    """Drives the consent state machine against the admin API."""

    kind = FlowKind.CONSENT
    template = "consent.html"

    async def begin(self, challenge: Optional[str]) -> Outcome:
        """Handle the GET redirect from the authorization server."""
        challenge = self._require(challenge)
        request = await self.admin.fetch_request(self.kind, challenge)
        return await self._finish(challenge, decide_consent(request))

    async def submit(self, submission: ConsentSubmission) -> Outcome:
        """Handle the form POST."""
        challenge = self._require(submission.challenge)
        transition = decide_consent_submission(submission)
        if transition.state is ConsentState.USER_ACCEPTED:
            # Audience is not user-editable; take it from the authoritative request.
            request = await self.admin.fetch_request(self.kind, challenge)
            transition = accept_consent_submission(submission, request, self.remember_for)
        return await self._finish(challenge, transition)
