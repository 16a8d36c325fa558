"""HTTP middleware: timeout, request size limit, request ID, security headers, edge access check.

Applied in main app; order matters (last added = outermost).
Import and use from practice_access.main.
"""

from practice_access.middleware.access_guard import AccessGuardMiddleware
from practice_access.middleware.request_id import RequestIDMiddleware
from practice_access.middleware.request_size_limit import RequestSizeLimitMiddleware
from practice_access.middleware.security_headers import SecurityHeadersMiddleware
from practice_access.middleware.timeout import TimeoutMiddleware

__all__ = [
    "AccessGuardMiddleware",
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
