"""
Application factory.

Wires the signed session (for CSRF tokens), the login/consent router and the
single error boundary. The admin client is created from settings unless one is
injected; an injected client is left for the caller to close.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from .credentials import StaticCredentialValidator
from .exceptions import LoginConsentError, ProviderError
from .hydra import create_admin_client
from .protocol import AdminClient, CredentialValidator
from .router import create_login_consent_router, templates
from .settings import Settings

logger = logging.getLogger(__name__)


async def log_registered_clients(admin: AdminClient, limit: int = 10) -> None:
    """Log the first page of OAuth2 clients; a failure is only a warning."""
    try:
        clients = await admin.list_clients(limit)
    except ProviderError as e:
        logger.warning("Could not list OAuth2 clients: %s (status=%s)", e, e.status)
        return
    for client in clients:
        logger.info("OAuth2 client %s (%s)", client.get("client_id"), client.get("client_name", ""))


def create_app(
    settings: Settings,
    admin: Optional[AdminClient] = None,
    validator: Optional[CredentialValidator] = None,
) -> FastAPI:
    owns_admin = admin is None
    if admin is None:
        admin = create_admin_client(settings)
    if validator is None:
        validator = StaticCredentialValidator()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.list_clients_on_startup:
            await log_registered_clients(admin)
        yield
        if owns_admin:
            await admin.aclose()

    app = FastAPI(lifespan=lifespan)
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)

    @app.exception_handler(LoginConsentError)
    async def login_consent_error(request: Request, exc: LoginConsentError):
        """Log the failure and render a generic error page; upstream details stay in the log."""
        if isinstance(exc, ProviderError):
            logger.error(
                "%s %s: %s (upstream status=%s body=%r)",
                request.method, request.url.path, exc, exc.status, exc.body,
            )
        else:
            logger.warning("%s %s: %s", request.method, request.url.path, exc)
        return templates.TemplateResponse(
            request,
            "error.html",
            {"message": exc.public_message},
            status_code=exc.status_code,
        )

    app.include_router(
        create_login_consent_router(admin, validator, settings.remember_for, settings.base_url)
    )

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app
