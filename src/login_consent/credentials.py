"""
Placeholder credential directory.

A fixed allow-list of identities sharing one secret. Replace with a real
directory lookup (hashed secrets, rate limiting) behind the same
CredentialValidator protocol; the login flow only sees the boolean.
"""

import hmac
from typing import Iterable

from .protocol import CredentialValidator

EXAMPLE_USERS = (
    "thomas@plenty.com",
    "christoph@plenty.com",
    "götz@plenty.com",
    "marcus@plenty.com",
)
EXAMPLE_SECRET = "foobar"


class StaticCredentialValidator(CredentialValidator):
    """Fixed allow-list of identities sharing a single secret."""

    def __init__(self, identities: Iterable[str] = EXAMPLE_USERS, secret: str = EXAMPLE_SECRET):
        self.identities = frozenset(identities)
        self.secret = secret

    async def validate(self, identity: str, secret: str) -> bool:
        """Membership in the allow-list plus a constant-time secret comparison."""
        if not identity or not secret:
            return False
        secret_ok = hmac.compare_digest(secret.encode("utf-8"), self.secret.encode("utf-8"))
        return identity in self.identities and secret_ok
