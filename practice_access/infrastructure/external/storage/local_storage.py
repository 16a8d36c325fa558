"""Local filesystem blob store for payment proofs (atomic writes, path validation)."""

from __future__ import annotations

import hashlib
import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from practice_access.core.constants import PROOF_CONTENT_TYPES
from practice_access.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
    StorageUploadError,
)
from practice_access.shared.utils.datetime import utc_now
from practice_access.shared.utils.generators import PROOF_NAME_PREFIX, generate_proof_name

logger = logging.getLogger(__name__)

_PRINCIPAL_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")
_META_SUFFIX = ".meta.json"


class LocalProofStore:
    """Stores proofs as <storage_root>/<principal_id>/payment_proof_<ms>_<cuid>.<ext>.

    References are the path relative to storage_root. Writes use temp file +
    rename; a JSON sidecar keeps checksum, content type and original filename.
    After each upload only the newest ``keep`` proofs of the principal are kept.
    """

    def __init__(self, storage_root: str, keep: int = 3) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.keep = keep
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(ref, "path_validation") from e
        return full_path

    def _principal_dir(self, principal_id: str) -> Path:
        if not _PRINCIPAL_RE.fullmatch(principal_id):
            raise StoragePermissionError(principal_id, "principal_validation")
        return self._get_full_path(principal_id)

    async def _write_metadata(self, file_path: Path, metadata: dict[str, Any]) -> None:
        meta_path = file_path.with_name(file_path.name + _META_SUFFIX)
        async with aiofiles.open(meta_path, "w") as f:
            await f.write(json.dumps(metadata, indent=2))
        os.chmod(meta_path, 0o640)

    async def upload_proof(
        self,
        principal_id: str,
        filename: str,
        content_type: str,
        data: bytes,
    ) -> str:
        """Write the proof atomically, prune old proofs, and return its reference."""
        extension = PROOF_CONTENT_TYPES.get(content_type, Path(filename).suffix or "bin")
        directory = self._principal_dir(principal_id)
        ref = f"{principal_id}/{generate_proof_name(extension)}"
        target_path = self._get_full_path(ref)
        try:
            directory.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=directory, prefix=".tmp_", suffix=target_path.suffix
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                os.rename(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
            await self._write_metadata(
                target_path,
                {
                    "ref": ref,
                    "checksum": hashlib.sha256(data).hexdigest(),
                    "size": len(data),
                    "content_type": content_type,
                    "original_filename": filename,
                    "uploaded_at": utc_now().isoformat(),
                },
            )
        except OSError as e:
            raise StorageUploadError(ref, str(e)) from e
        await self._prune(principal_id)
        return ref

    async def list_proofs(self, principal_id: str) -> list[str]:
        """Return the principal's proof references, newest first."""
        directory = self._principal_dir(principal_id)
        if not directory.exists():
            return []
        names = sorted(
            (
                p.name
                for p in directory.iterdir()
                if p.name.startswith(PROOF_NAME_PREFIX) and not p.name.endswith(_META_SUFFIX)
            ),
            reverse=True,
        )
        return [f"{principal_id}/{name}" for name in names]

    async def delete_proof(self, ref: str) -> bool:
        """Delete a proof and its sidecar. Returns True if deleted."""
        file_path = self._get_full_path(ref)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
            meta_path = file_path.with_name(file_path.name + _META_SUFFIX)
            if meta_path.exists():
                await aiofiles.os.remove(meta_path)
        except OSError as e:
            raise StorageDeleteError(ref, str(e)) from e
        return True

    async def _prune(self, principal_id: str) -> None:
        """Keep only the newest proofs; a failed delete is logged, not raised."""
        for ref in (await self.list_proofs(principal_id))[self.keep :]:
            try:
                await self.delete_proof(ref)
            except StorageDeleteError as e:
                logger.warning("Could not prune old payment proof %s: %s", ref, e.details)
