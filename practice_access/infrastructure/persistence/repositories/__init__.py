"""Repositories: SQLAlchemy implementations of the application ports."""

from practice_access.infrastructure.persistence.repositories.admin_action_log_repo import (
    AdminActionLogRepository,
)
from practice_access.infrastructure.persistence.repositories.admin_repo import (
    AdminRepository,
)
from practice_access.infrastructure.persistence.repositories.base import (
    BaseRepository,
    store_errors,
)
from practice_access.infrastructure.persistence.repositories.doctor_repo import (
    DoctorRepository,
)
from practice_access.infrastructure.persistence.repositories.exemption_repo import (
    ExemptionRepository,
)

__all__ = [
    "AdminActionLogRepository",
    "AdminRepository",
    "BaseRepository",
    "DoctorRepository",
    "ExemptionRepository",
    "store_errors",
]
