"""Bounded record-store calls.

Guards and workflows never wait indefinitely on the record store: a call that
exceeds the timeout is treated exactly like a store failure.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from practice_access.domain.exceptions import PersistenceException

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_STORE_TIMEOUT_SECONDS = 5.0


async def bounded(
    call: Awaitable[T],
    operation: str,
    timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
) -> T:
    """Await a store call with a timeout.

    Raises:
        PersistenceException: the call timed out (nothing is assumed applied).
    """
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except TimeoutError as e:
        logger.warning("Record store call timed out: %s (%.1fs)", operation, timeout)
        raise PersistenceException(operation, "timeout") from e
