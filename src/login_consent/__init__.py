"""
Login & consent provider for an OAuth2 / OpenID Connect authorization server.

Exposes the application factory (create_app), the flow state machines
(LoginFlow, ConsentFlow), the admin API client (HydraAdminClient) and the
collaborator protocols (AdminClient, CredentialValidator).
"""

from .app import create_app
from .credentials import StaticCredentialValidator
from .exceptions import InvalidCsrf, LoginConsentError, MissingChallenge, ProviderError
from .flows import ConsentFlow, ConsentState, LoginFlow, LoginState, Redirect, Render
from .hydra import HydraAdminClient, create_admin_client
from .protocol import AdminClient, CredentialValidator
from .settings import Settings

__all__ = [
    "create_app",
    "Settings",
    "LoginFlow",
    "ConsentFlow",
    "LoginState",
    "ConsentState",
    "Redirect",
    "Render",
    "AdminClient",
    "CredentialValidator",
    "HydraAdminClient",
    "create_admin_client",
    "StaticCredentialValidator",
    "LoginConsentError",
    "MissingChallenge",
    "InvalidCsrf",
    "ProviderError",
]
