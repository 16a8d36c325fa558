"""Domain exceptions for the access and subscription engine.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class PracticeAccessException(Exception):
    """Base exception for all application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(PracticeAccessException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(PracticeAccessException):
    """Raised when there is no valid session (unauthenticated principal)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(PracticeAccessException):
    """Raised when the principal is authenticated but lacks the required role."""

    def __init__(
        self,
        required_role: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional required role, action, and message.

        Args:
            required_role: Role the caller needed (e.g. 'admin').
            action: Optional action that was attempted (e.g. 'approve').
            message: Human-readable message; default used when role/action omitted.
        """
        if required_role and action:
            message = f"Permission denied: {action} requires role {required_role}"
        details: dict[str, Any] = {}
        if required_role:
            details["required_role"] = required_role
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(PracticeAccessException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'doctor', 'exemption').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateExemptionException(PracticeAccessException):
    """Raised when adding an exemption for an email that is already exempt."""

    def __init__(self, email: str) -> None:
        super().__init__(
            f"Email is already exempt: {email}",
            "DUPLICATE_EXEMPTION",
            {"email": email},
        )


class DuplicateDoctorException(PracticeAccessException):
    """Raised when registering a doctor profile for a principal that already has a role."""

    def __init__(self, principal_id: str) -> None:
        super().__init__(
            "Principal is already registered",
            "DUPLICATE_DOCTOR",
            {"principal_id": principal_id},
        )


class PersistenceException(PracticeAccessException):
    """Raised when a record-store call fails or times out. Nothing was changed."""

    def __init__(self, operation: str, reason: str) -> None:
        """Initialize with the failing operation and a short reason.

        Args:
            operation: Store operation (e.g. 'doctors.update').
            reason: Short description (e.g. 'timeout', driver error class).
        """
        super().__init__(
            f"Record store operation failed: {operation}",
            "PERSISTENCE_ERROR",
            {"operation": operation, "reason": reason, "retryable": True},
        )


class IntegrityFaultException(PracticeAccessException):
    """Raised when a principal matches neither the admins nor the doctors records."""

    def __init__(self, principal_id: str) -> None:
        super().__init__(
            "Account has no role assigned",
            "INTEGRITY_FAULT",
            {"principal_id": principal_id},
        )


class InvalidTransitionException(PracticeAccessException):
    """Raised when a subscription action is not allowed from the current state."""

    def __init__(self, action: str, current_status: str) -> None:
        """Initialize with the rejected action and the current status.

        Args:
            action: Action that was attempted (e.g. 'approve').
            current_status: Current subscription status of the doctor.
        """
        super().__init__(
            f"Cannot {action} a subscription in status {current_status}",
            "INVALID_TRANSITION",
            {"action": action, "current_status": current_status},
        )
