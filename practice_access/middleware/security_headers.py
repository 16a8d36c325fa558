"""Security headers middleware.

Adds security-related response headers. Redirects are access decisions tied
to the session cookie, so they are always sent no-store with Vary: Cookie,
even when the app set its own Cache-Control. HSTS is only sent over https.
Uses raw ASGI (no BaseHTTPMiddleware).
"""

from collections.abc import Callable

DEFAULT_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
    "Cache-Control": "no-store",
}
HSTS_HEADER = (b"strict-transport-security", b"max-age=31536000; includeSubDomains")

_NO_STORE = (b"cache-control", b"no-store")
_VARY_COOKIE = (b"vary", b"Cookie")


def _is_redirect(status: int) -> bool:
    return 300 <= status < 400


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Set security headers on all responses unless the app already set them. Raw ASGI."""
    resolved = headers if headers is not None else DEFAULT_HEADERS
    header_list = [(k.lower().encode(), v.encode()) for k, v in resolved.items()]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        extra = [*header_list, HSTS_HEADER] if scope.get("scheme") == "https" else header_list

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                if _is_redirect(message.get("status", 200)):
                    headers = [h for h in headers if h[0].lower() != b"cache-control"]
                    headers.append(_NO_STORE)
                    if not any(name.lower() == b"vary" for name, _ in headers):
                        headers.append(_VARY_COOKIE)
                present = {name.lower() for name, _ in headers}
                headers.extend(h for h in extra if h[0] not in present)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
