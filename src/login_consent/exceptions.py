"""
Error taxonomy for the login/consent provider.

Every exception here is fatal for the current request and is turned into a
generic error page by the single exception handler registered in app.py.
Invalid credentials are not an error: the login flow re-renders its form.
"""

from typing import Optional


class LoginConsentError(Exception):
    """Base class; status_code is the HTTP status rendered by the error boundary."""

    status_code: int = 500
    public_message: str = "Something went wrong while processing your request."


class MissingChallenge(LoginConsentError):
    """The login or consent challenge was absent or empty."""

    status_code = 400
    public_message = "The request is missing its login or consent challenge."

    def __init__(self, flow: str):
        self.flow = flow
        super().__init__(f"Expected a {flow} challenge to be set but received none.")


class InvalidCsrf(LoginConsentError):
    """Anti-forgery token missing or not matching the one issued at render time."""

    status_code = 403
    public_message = "Your form has expired. Please start again."

    def __init__(self):
        super().__init__("Invalid CSRF token")


class ProviderError(LoginConsentError):
    """
    Failure talking to the authorization server's admin API.

    Carries the upstream status (None for transport failures) and body for
    operator logs; neither is shown to the end user.
    """

    status_code = 502
    public_message = "The authorization server could not complete your request."

    def __init__(self, message: str, status: Optional[int] = None, body: Optional[str] = None):
        self.status = status
        self.body = body
        super().__init__(message)
