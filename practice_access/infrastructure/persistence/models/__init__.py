"""Persistence models: ORM entities and mixins."""

from practice_access.infrastructure.persistence.models.admin import Admin
from practice_access.infrastructure.persistence.models.admin_action_log import (
    AdminActionLog,
)
from practice_access.infrastructure.persistence.models.doctor import Doctor
from practice_access.infrastructure.persistence.models.exempted_user import ExemptedUser
from practice_access.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
)

__all__ = [
    "Admin",
    "AdminActionLog",
    "CreatedAtMixin",
    "CuidMixin",
    "Doctor",
    "ExemptedUser",
    "TimestampMixin",
]
