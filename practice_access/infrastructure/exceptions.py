"""Payment proof store exceptions.

They extend PracticeAccessException so the exception handlers map them like
any domain error. Messages never include the storage root.
"""

from practice_access.domain.exceptions import PracticeAccessException


class StorageException(PracticeAccessException):
    """Base exception for proof store operations."""


class StorageUploadError(StorageException):
    def __init__(self, ref: str, reason: str) -> None:
        super().__init__(
            "Payment proof could not be stored; try again",
            "STORAGE_UPLOAD_ERROR",
            {"ref": ref, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Raised when an old proof cannot be pruned or removed."""

    def __init__(self, ref: str, reason: str) -> None:
        super().__init__(
            f"Payment proof {ref} could not be deleted",
            "STORAGE_DELETE_ERROR",
            {"ref": ref, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Reference or principal id would resolve outside the principal's proof directory."""

    def __init__(self, ref: str, operation: str) -> None:
        super().__init__(
            "Invalid payment proof reference",
            "STORAGE_PERMISSION_ERROR",
            {"ref": ref, "operation": operation},
        )
