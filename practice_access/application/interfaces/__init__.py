"""Application ports (Protocols implemented by infrastructure)."""

from practice_access.application.interfaces.repositories import (
    IAdminActionLogRepository,
    IAdminRepository,
    IDoctorRepository,
    IExemptionRepository,
)
from practice_access.application.interfaces.services import (
    INotificationService,
    IProofStore,
)

__all__ = [
    "IAdminActionLogRepository",
    "IAdminRepository",
    "IDoctorRepository",
    "IExemptionRepository",
    "INotificationService",
    "IProofStore",
]
