"""Test doubles and builders shared across the test modules."""

from login_consent.exceptions import ProviderError
from login_consent.models import ConsentRequest, LoginRequest, RedirectResult

REDIRECT_TO = "https://auth.example.com/oauth2/auth?client_id=app&login_verifier=v-123"


class FakeAdminClient:
    def __init__(self, redirect_to=REDIRECT_TO):
        self.requests = {}
        self.redirect_to = redirect_to
        self.calls = []
        self.clients = []
        self.error = None
        # Fires only on accept/reject, after a successful fetch.
        self.mutation_error = None

    def add(self, kind, request):
        self.requests[(kind, request.challenge)] = request

    def verbs(self):
        return [call[0] for call in self.calls]

    def mutations(self):
        return [call for call in self.calls if call[0] in ("accept", "reject")]

    async def fetch_request(self, kind, challenge):
        self.calls.append(("fetch", kind, challenge, None))
        if self.error:
            raise self.error
        return self.requests[(kind, challenge)]

    async def accept(self, kind, challenge, payload):
        self.calls.append(("accept", kind, challenge, payload))
        if self.error:
            raise self.error
        if self.mutation_error:
            raise self.mutation_error
        return RedirectResult(redirect_to=self.redirect_to)

    async def reject(self, kind, challenge, payload):
        self.calls.append(("reject", kind, challenge, payload))
        if self.error:
            raise self.error
        if self.mutation_error:
            raise self.mutation_error
        return RedirectResult(redirect_to=self.redirect_to)

    async def list_clients(self, limit=10):
        self.calls.append(("list_clients", None, None, limit))
        if self.error:
            raise self.error
        return self.clients[:limit]


def login_request(challenge="xyz", skip=False, subject=""):
    return LoginRequest(challenge=challenge, skip=skip, subject=subject)


def consent_request(
    challenge="abc",
    skip=False,
    subject="thomas@plenty.com",
    scope=("openid", "offline"),
    audience=("https://api.example.com",),
):
    return ConsentRequest(
        challenge=challenge,
        skip=skip,
        subject=subject,
        requested_scope=tuple(scope),
        requested_access_token_audience=tuple(audience),
        client={"client_id": "app", "client_name": "Example App"},
    )


def provider_error():
    return ProviderError("Admin API GET /admin/oauth2/auth/requests/login returned 404", 404, '{"error":"not_found"}')


