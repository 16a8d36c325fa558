"""Domain enumerations for the access and subscription engine.

Enums represent fixed sets of domain values (subscription status, roles,
admin actions, route areas).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class SubscriptionStatus(_ValuesMixin, str, Enum):
    """Subscription label stored on the doctor account.

    The label is independent of is_active, which is the actual access gate.
    """

    PENDING_VERIFICATION = "pending_verification"
    ACTIVE = "active"
    EXPIRED = "expired"


class DoctorRole(_ValuesMixin, str, Enum):
    """Role column of the doctor account. ADMIN doctors skip subscription enforcement."""

    DOCTOR = "doctor"
    ADMIN = "admin"


class PrincipalRole(_ValuesMixin, str, Enum):
    """Outcome of role resolution for a principal (derived per request, never stored)."""

    ADMIN = "admin"
    DOCTOR = "doctor"
    UNKNOWN = "unknown"
    UNAUTHENTICATED = "unauthenticated"
    ERROR = "error"


class AdminAction(_ValuesMixin, str, Enum):
    """Administrator-initiated subscription transitions."""

    APPROVE = "approve"
    REJECT = "reject"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"


class RouteArea(_ValuesMixin, str, Enum):
    """Area of the application a navigation targets."""

    DASHBOARD = "dashboard"
    PROFILE = "profile"
    ADMIN = "admin"
    PUBLIC = "public"


class NotificationKind(_ValuesMixin, str, Enum):
    """Kinds of notifications dispatched to administrators or doctors."""

    NEW_REGISTRATION = "new_registration"
    PAYMENT_UPLOADED = "payment_uploaded"
    PAYMENT_REMINDER = "payment_reminder"
