"""Derive client metadata recorded with admin actions from a Starlette Request."""

from __future__ import annotations

from starlette.requests import Request

from practice_access.application.dtos.access import RequestMetadata


def get_client_ip(request: Request) -> str | None:
    """IP from X-Forwarded-For (first hop), X-Real-IP, or the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else None


def get_request_metadata(request: Request) -> RequestMetadata:
    """Return ip_address and user_agent for admin action log entries."""
    return RequestMetadata(
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
