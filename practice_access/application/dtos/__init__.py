"""Application DTOs (frozen dataclasses passed between layers)."""

from practice_access.application.dtos.access import (
    AdminActionResult,
    Principal,
    ReminderCandidate,
    RequestMetadata,
    RoleResolution,
    SweepResult,
)
from practice_access.application.dtos.admin import AdminResult
from practice_access.application.dtos.admin_action_log import (
    AdminActionLogCreate,
    AdminActionLogResult,
)
from practice_access.application.dtos.doctor import (
    DoctorAccountResult,
    DoctorCreate,
    DoctorProfile,
    ProofUploadResult,
    SubscriptionSummary,
)
from practice_access.application.dtos.exemption import ExemptionEntryResult

__all__ = [
    "AdminActionLogCreate",
    "AdminActionLogResult",
    "AdminActionResult",
    "AdminResult",
    "DoctorAccountResult",
    "DoctorCreate",
    "DoctorProfile",
    "ExemptionEntryResult",
    "Principal",
    "ProofUploadResult",
    "ReminderCandidate",
    "RequestMetadata",
    "RoleResolution",
    "SubscriptionSummary",
    "SweepResult",
]
