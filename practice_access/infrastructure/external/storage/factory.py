"""Blob store factory: creates the payment proof store from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from practice_access.application.interfaces.services import IProofStore

if TYPE_CHECKING:
    from practice_access.core.config import Settings


class StorageFactory:
    """Factory for proof store instances based on configuration."""

    @staticmethod
    def create_proof_store(settings: "Settings | None" = None) -> IProofStore:
        """Create the proof store from settings.

        Raises:
            ValueError: storage_root is not configured.
        """
        from practice_access.core.config import get_settings
        from practice_access.infrastructure.external.storage.local_storage import (
            LocalProofStore,
        )

        s = settings or get_settings()
        if not s.storage_root:
            raise ValueError("STORAGE_ROOT required for the payment proof store")
        return LocalProofStore(storage_root=s.storage_root, keep=s.proofs_kept_per_doctor)
