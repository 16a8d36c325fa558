"""Application services: role resolution, exemptions, subscriptions, access guard, admin workflow."""

from practice_access.application.services.access_guard import AccessGuard
from practice_access.application.services.admin_verification_service import (
    AdminVerificationService,
)
from practice_access.application.services.exemption_registry import (
    ExemptionRegistry,
    normalize_email,
)
from practice_access.application.services.role_resolver import (
    RoleResolver,
    require_admin,
    require_authenticated,
    require_doctor,
)
from practice_access.application.services.subscription_service import (
    SubscriptionService,
)

__all__ = [
    "AccessGuard",
    "AdminVerificationService",
    "ExemptionRegistry",
    "RoleResolver",
    "SubscriptionService",
    "normalize_email",
    "require_admin",
    "require_authenticated",
    "require_doctor",
]
