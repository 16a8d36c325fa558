"""Request body size limit middleware.

Rejects requests whose body exceeds max_bytes, by Content-Length up front or
while streaming when the length is not declared (chunked). Once the 413 is
sent, anything the app still tries to send is dropped.
Uses raw ASGI (no BaseHTTPMiddleware).
"""

from collections.abc import Callable

from practice_access.middleware._asgi import get_header, send_json_error


class _BodyTooLarge(Exception):
    pass


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject request bodies larger than max_bytes with 413. Raw ASGI."""

    async def reject(send: Callable, actual: int | None) -> None:
        details: dict[str, int] = {"max_bytes": max_bytes}
        if actual is not None:
            details["content_length"] = actual
        await send_json_error(
            send,
            413,
            "PAYLOAD_TOO_LARGE",
            f"Request body must be at most {max_bytes} bytes",
            details,
        )

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                length = None
            if length is not None and length > max_bytes:
                await reject(send, length)
                return
            await app(scope, receive, send)
            return

        received = 0
        response_started = False
        rejected = False

        async def counting_receive() -> dict:
            nonlocal received, rejected
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > max_bytes:
                    if not response_started and not rejected:
                        rejected = True
                        await reject(send, received)
                    raise _BodyTooLarge()
            return message

        async def tracking_send(message: dict) -> None:
            nonlocal response_started
            if rejected:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await app(scope, counting_receive, tracking_send)
        except _BodyTooLarge:
            pass

    return asgi_app
