"""Anti-forgery tokens kept in the signed Starlette session."""

import hmac
import secrets
from typing import Optional

from fastapi import Request

from .exceptions import InvalidCsrf

SESSION_KEY = "csrf_token"
FORM_FIELD = "csrf_token"


def issue_csrf_token(request: Request) -> str:
    """Return the session's CSRF token, creating one on first use."""
    if SESSION_KEY not in request.session:
        request.session[SESSION_KEY] = secrets.token_urlsafe(32)
    return request.session[SESSION_KEY]


def verify_csrf_token(request: Request, form_token: Optional[str]) -> None:
    """Raise InvalidCsrf unless form_token matches the session token."""
    session_token = request.session.get(SESSION_KEY)
    if not session_token or not form_token or not hmac.compare_digest(session_token.encode(), form_token.encode()):
        request.session.pop(SESSION_KEY, None)
        raise InvalidCsrf()
