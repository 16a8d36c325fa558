"""Domain layer: subscription state machine, access policy, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from practice_access.domain.access_policy import (
    AccessContext,
    AccessDecision,
    area_for_path,
    decide,
)
from practice_access.domain.entities import (
    SubscriptionPatch,
    SubscriptionState,
    SubscriptionStateMachine,
)
from practice_access.domain.enums import (
    AdminAction,
    DoctorRole,
    PrincipalRole,
    RouteArea,
    SubscriptionStatus,
)
from practice_access.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DuplicateDoctorException,
    DuplicateExemptionException,
    IntegrityFaultException,
    InvalidTransitionException,
    PersistenceException,
    PracticeAccessException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Policy
    "AccessContext",
    "AccessDecision",
    "area_for_path",
    "decide",
    # Entities
    "SubscriptionPatch",
    "SubscriptionState",
    "SubscriptionStateMachine",
    # Enums
    "AdminAction",
    "DoctorRole",
    "PrincipalRole",
    "RouteArea",
    "SubscriptionStatus",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "DuplicateDoctorException",
    "DuplicateExemptionException",
    "IntegrityFaultException",
    "InvalidTransitionException",
    "PersistenceException",
    "PracticeAccessException",
    "ResourceNotFoundException",
    "ValidationException",
]
