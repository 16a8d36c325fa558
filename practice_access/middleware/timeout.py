"""Request timeout middleware.

Cancels the request if it runs longer than the configured timeout (asyncio.wait_for).
Uses raw ASGI (no BaseHTTPMiddleware).
"""

import asyncio
import logging
from collections.abc import Callable

from practice_access.middleware._asgi import send_json_error

logger = logging.getLogger(__name__)


def TimeoutMiddleware(app: Callable, timeout_seconds: int) -> Callable:
    """Cancel request after timeout_seconds (504 if nothing was sent yet). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        response_started = False

        async def tracking_send(message: dict) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                app(scope, receive, tracking_send), timeout=float(timeout_seconds)
            )
        except TimeoutError:
            logger.warning(
                "Request timed out after %s seconds: %s %s",
                timeout_seconds,
                scope.get("method", ""),
                scope.get("path", ""),
            )
            if not response_started:
                await send_json_error(
                    send,
                    504,
                    "GATEWAY_TIMEOUT",
                    f"Request timed out after {timeout_seconds} seconds",
                    {"timeout_seconds": timeout_seconds},
                )

    return asgi_app
