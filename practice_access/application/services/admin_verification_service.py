"""Admin verification workflow: approve, reject, activate, deactivate.

The doctor update is the source of truth; the action log entry is best-effort
and written through its own session. When the log write fails or times out the
change stays applied and the result is marked degraded (audit_logged=False).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Any

from practice_access.application.dtos.access import (
    AdminActionResult,
    RequestMetadata,
    RoleResolution,
)
from practice_access.application.dtos.admin_action_log import (
    AdminActionLogCreate,
    AdminActionLogResult,
)
from practice_access.application.dtos.doctor import DoctorAccountResult
from practice_access.application.interfaces.repositories import (
    IAdminActionLogRepository,
    IDoctorRepository,
)
from practice_access.application.services.role_resolver import require_admin
from practice_access.application.services.store_calls import (
    DEFAULT_STORE_TIMEOUT_SECONDS,
    bounded,
)
from practice_access.domain.entities.subscription import (
    SubscriptionPatch,
    SubscriptionStateMachine,
)
from practice_access.domain.enums import AdminAction, SubscriptionStatus
from practice_access.domain.exceptions import (
    PracticeAccessException,
    ResourceNotFoundException,
)
from practice_access.shared.telemetry.tracing import traced
from practice_access.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

_ACTION_VERBS = {
    AdminAction.APPROVE: "approved the payment of",
    AdminAction.REJECT: "rejected the payment of",
    AdminAction.ACTIVATE: "activated",
    AdminAction.DEACTIVATE: "deactivated",
}


def patch_to_fields(patch: SubscriptionPatch) -> dict[str, Any]:
    """JSON-safe view of a patch (enum values, ISO-8601 datetimes)."""
    fields: dict[str, Any] = {}
    for key, value in patch.fields.items():
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, datetime):
            value = value.isoformat()
        fields[key] = value
    return fields


class AdminVerificationService:
    """Administrator-initiated subscription transitions plus the admin read views."""

    def __init__(
        self,
        doctor_repo: IDoctorRepository,
        action_log_repo: IAdminActionLogRepository,
        state_machine: SubscriptionStateMachine | None = None,
        *,
        timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.doctor_repo = doctor_repo
        self.action_log_repo = action_log_repo
        self.state_machine = state_machine or SubscriptionStateMachine()
        self.timeout = timeout
        self.clock = clock

    @traced("admin_verification.perform_action")
    async def perform_action(
        self,
        resolution: RoleResolution,
        *,
        doctor_id: str,
        action: AdminAction,
        metadata: RequestMetadata | None = None,
    ) -> AdminActionResult:
        """Apply an admin action to a doctor and append an action log entry.

        Raises:
            AuthenticationException / AuthorizationException: caller is not an admin.
            ResourceNotFoundException: no such doctor.
            InvalidTransitionException: approve/reject on a doctor not pending verification.
            PersistenceException: the update failed or timed out; nothing changed.
        """
        admin_id = require_admin(resolution, action)
        doctor = await self.get_doctor(doctor_id)
        patch = self.state_machine.on_admin_action(doctor.subscription, action, self.clock())
        updated = await bounded(
            self.doctor_repo.apply_patch(doctor_id, patch), "doctors.update", self.timeout
        )
        if updated is None:
            raise ResourceNotFoundException("doctor", doctor_id)
        updated_fields = patch_to_fields(patch)
        logger.info("Admin %s performed %s on doctor %s", admin_id, action.value, doctor_id)

        admin_name = resolution.admin.full_name if resolution.admin else None
        details = (
            f"Admin {admin_name or admin_id} {_ACTION_VERBS[action]} "
            f"doctor {doctor.full_name} ({doctor.email})"
        )
        meta = metadata or RequestMetadata()
        try:
            await bounded(
                self.action_log_repo.create(
                    AdminActionLogCreate(
                        admin_id=admin_id,
                        action=action.value,
                        details=details,
                        user_agent=meta.user_agent,
                        ip_address=meta.ip_address,
                    )
                ),
                "admin_activity_logs.insert",
                self.timeout,
            )
        except PracticeAccessException as e:
            logger.error(
                "Admin action %s on doctor %s applied but not logged: %s",
                action.value,
                doctor_id,
                e.message,
            )
            await self._discard_log_write()
            return AdminActionResult(
                doctor_id=doctor_id,
                action=action,
                updated_fields=updated_fields,
                audit_logged=False,
                audit_error=e.message,
            )
        return AdminActionResult(
            doctor_id=doctor_id, action=action, updated_fields=updated_fields
        )

    async def _discard_log_write(self) -> None:
        try:
            await bounded(
                self.action_log_repo.discard(), "admin_activity_logs.rollback", self.timeout
            )
        except PracticeAccessException as e:
            logger.warning("Action log rollback failed: %s", e.message)

    async def get_doctor(self, doctor_id: str) -> DoctorAccountResult:
        doctor = await bounded(
            self.doctor_repo.get_by_id(doctor_id), "doctors.find_one", self.timeout
        )
        if doctor is None:
            raise ResourceNotFoundException("doctor", doctor_id)
        return doctor

    async def list_doctors(
        self,
        status: SubscriptionStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[DoctorAccountResult]:
        """List doctors, e.g. the pending-verification queue."""
        return await bounded(
            self.doctor_repo.list_by_status(status, skip=skip, limit=limit),
            "doctors.list_where",
            self.timeout,
        )

    async def list_action_log(
        self,
        skip: int = 0,
        limit: int = 100,
        admin_id: str | None = None,
    ) -> list[AdminActionLogResult]:
        return await bounded(
            self.action_log_repo.list(skip=skip, limit=limit, admin_id=admin_id),
            "admin_activity_logs.list_where",
            self.timeout,
        )
