"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Central limit strings keep rate limits DRY.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
EXEMPTION_CHECK_LIMIT = "20/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"
UPLOAD_LIMIT = "10/minute"
SCHEDULER_LIMIT = "10/minute"

limit_exemption_check = limiter.limit(EXEMPTION_CHECK_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
limit_upload = limiter.limit(UPLOAD_LIMIT)
limit_scheduler = limiter.limit(SCHEDULER_LIMIT)
