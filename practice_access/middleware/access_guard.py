"""Edge access check for protected page prefixes (/dashboard, /profile, /admin).

Runs before any page logic. Reads the session from the session cookie or a
Bearer header, asks the app's access evaluator for a decision and either
passes the request through or redirects. A decision with sign_out deletes the
session cookie on the redirect so the principal is not re-evaluated in a loop.
Any evaluator failure redirects to login.
Uses raw ASGI (no BaseHTTPMiddleware).
"""

import logging
from collections.abc import Awaitable, Callable

from starlette.requests import HTTPConnection
from starlette.responses import RedirectResponse

from practice_access.application.dtos.access import Principal
from practice_access.domain.access_policy import LOGIN_PATH, AccessDecision, area_for_path
from practice_access.domain.enums import RouteArea
from practice_access.infrastructure.security.jwt import principal_from_token

logger = logging.getLogger(__name__)

AccessEvaluator = Callable[[Principal | None, str], Awaitable[AccessDecision]]


def session_token(connection: HTTPConnection, cookie_name: str) -> str | None:
    """Session token from the cookie, else from Authorization: Bearer."""
    token = connection.cookies.get(cookie_name)
    if token:
        return token
    auth = connection.headers.get("Authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip() or None
    return None


def AccessGuardMiddleware(app: Callable, cookie_name: str = "session") -> Callable:
    """Enforce the access policy on protected page prefixes. Raw ASGI.

    The evaluator is read from app.state.access_evaluator on each request:
    ``async (principal, path) -> AccessDecision``.
    """

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or area_for_path(scope["path"]) == RouteArea.PUBLIC:
            await app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        principal = principal_from_token(session_token(connection, cookie_name))
        try:
            evaluator: AccessEvaluator = scope["app"].state.access_evaluator
            decision = await evaluator(principal, scope["path"])
        except Exception:
            logger.exception("Edge access check failed for %s; redirecting to login", scope["path"])
            decision = AccessDecision.redirect(LOGIN_PATH, reason="error")

        if decision.allowed:
            scope.setdefault("state", {})["access_decision"] = decision
            await app(scope, receive, send)
            return

        response = RedirectResponse(decision.redirect_to or LOGIN_PATH, status_code=307)
        if decision.sign_out:
            response.delete_cookie(cookie_name, path="/")
        await response(scope, receive, send)

    return asgi_app
