"""
FastAPI router: GET/POST /login and GET/POST /consent.

Handlers only extract the challenge and form fields, check the CSRF token, and
turn a flow Outcome into either a 302 redirect or a rendered template. All
decisions live in flows.py.
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.datastructures import FormData

from .csrf import FORM_FIELD, issue_csrf_token, verify_csrf_token
from .flows import ConsentFlow, LoginFlow, Outcome, Redirect
from .models import ConsentSubmission, FlowKind, LoginSubmission
from .payloads import normalize_scope
from .protocol import AdminClient, CredentialValidator

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def form_action(base_url: str, path: str) -> str:
    """Join BASE_URL and a route path the way url-join does (no path truncation)."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def _field(form: FormData, name: str) -> str:
    value = form.get(name)
    return value if isinstance(value, str) else ""


def _checked(form: FormData, name: str) -> bool:
    return bool(_field(form, name))


def _challenge_from_query(request: Request, kind: FlowKind) -> Optional[str]:
    return request.query_params.get(kind.challenge_param)


async def _checked_form(request: Request) -> FormData:
    """Read the POST body and reject it before anything else if the CSRF token is wrong."""
    form = await request.form()
    verify_csrf_token(request, _field(form, FORM_FIELD))
    return form


def _finalize(request: Request, outcome: Outcome):
    if isinstance(outcome, Redirect):
        return RedirectResponse(url=outcome.url, status_code=302)
    context = {**outcome.context, "csrf_token": issue_csrf_token(request)}
    return templates.TemplateResponse(request, outcome.template, context)


def create_login_consent_router(
    admin: AdminClient, validator: CredentialValidator, remember_for: int, base_url: str = ""
) -> APIRouter:
    """Create an APIRouter with the login and consent endpoints bound to the given collaborators."""
    login_flow = LoginFlow(admin, validator, remember_for, form_action(base_url, "/login"))
    consent_flow = ConsentFlow(admin, remember_for, form_action(base_url, "/consent"))
    router = APIRouter()

    @router.get("/login")
    async def login(request: Request):
        """Skip straight back to the authorization server, or show the login form."""
        outcome = await login_flow.begin(_challenge_from_query(request, FlowKind.LOGIN))
        return _finalize(request, outcome)

    @router.post("/login")
    async def login_submit(request: Request):
        form = await _checked_form(request)
        submission = LoginSubmission(
            challenge=_field(form, "challenge"),
            email=_field(form, "email"),
            password=_field(form, "password"),
            submit=_field(form, "submit"),
            remember=_checked(form, "remember"),
        )
        return _finalize(request, await login_flow.submit(submission))

    @router.get("/consent")
    async def consent(request: Request):
        """Skip straight back to the authorization server, or show the consent form."""
        outcome = await consent_flow.begin(_challenge_from_query(request, FlowKind.CONSENT))
        return _finalize(request, outcome)

    @router.post("/consent")
    async def consent_submit(request: Request):
        form = await _checked_form(request)
        submission = ConsentSubmission(
            challenge=_field(form, "challenge"),
            grant_scope=normalize_scope([v for v in form.getlist("grant_scope") if isinstance(v, str)]),
            submit=_field(form, "submit"),
            remember=_checked(form, "remember"),
        )
        return _finalize(request, await consent_flow.submit(submission))

    return router
