"""Blob store for payment proofs (local filesystem).

Implementations satisfy IProofStore (upload_proof, list_proofs, delete_proof).
"""

from practice_access.infrastructure.external.storage.factory import StorageFactory
from practice_access.infrastructure.external.storage.local_storage import LocalProofStore

__all__ = ["LocalProofStore", "StorageFactory"]
