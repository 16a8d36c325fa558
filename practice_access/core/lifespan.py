"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (blob store, DB engine dispose).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from practice_access.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: payment proof store (unless a test already installed one).
    Shutdown: SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    if getattr(app.state, "proof_store", None) is None:
        from practice_access.infrastructure.external.storage import StorageFactory

        app.state.proof_store = StorageFactory.create_proof_store(settings)
        logger.info("Payment proof store ready at %s", settings.storage_root)

    yield

    # ---- Shutdown ----
    from practice_access.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
