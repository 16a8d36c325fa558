"""Role resolver: Admin, Doctor, Unknown, Unauthenticated or Error for a principal."""

from __future__ import annotations

import logging

from practice_access.application.dtos.access import Principal, RoleResolution
from practice_access.application.dtos.doctor import DoctorAccountResult
from practice_access.application.interfaces.repositories import (
    IAdminRepository,
    IDoctorRepository,
)
from practice_access.application.services.store_calls import (
    DEFAULT_STORE_TIMEOUT_SECONDS,
    bounded,
)
from practice_access.domain.enums import AdminAction, PrincipalRole
from practice_access.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    IntegrityFaultException,
    PersistenceException,
)

logger = logging.getLogger(__name__)


class RoleResolver:
    """Look up the admins then the doctors record set by principal id.

    Read-only and idempotent. Never raises: store failures and timeouts
    become PrincipalRole.ERROR, which callers treat like UNAUTHENTICATED.
    """

    def __init__(
        self,
        admin_repo: IAdminRepository,
        doctor_repo: IDoctorRepository,
        timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
    ) -> None:
        self.admin_repo = admin_repo
        self.doctor_repo = doctor_repo
        self.timeout = timeout

    async def resolve(self, principal: Principal | None) -> RoleResolution:
        if principal is None:
            return RoleResolution(role=PrincipalRole.UNAUTHENTICATED)
        try:
            admin = await bounded(
                self.admin_repo.get_by_id(principal.id), "admins.find_one", self.timeout
            )
            if admin is not None:
                return RoleResolution(
                    role=PrincipalRole.ADMIN, principal=principal, admin=admin
                )
            doctor = await bounded(
                self.doctor_repo.get_by_id(principal.id), "doctors.find_one", self.timeout
            )
        except PersistenceException as e:
            logger.warning(
                "Role resolution failed for principal %s: %s", principal.id, e.details
            )
            return RoleResolution(
                role=PrincipalRole.ERROR, principal=principal, error=e.message
            )
        except Exception as e:
            logger.exception("Unexpected error resolving role for principal %s", principal.id)
            return RoleResolution(
                role=PrincipalRole.ERROR, principal=principal, error=str(e)
            )
        if doctor is not None:
            return RoleResolution(
                role=PrincipalRole.DOCTOR, principal=principal, doctor=doctor
            )
        logger.warning("Principal %s matches neither admins nor doctors", principal.id)
        return RoleResolution(role=PrincipalRole.UNKNOWN, principal=principal)


def require_authenticated(resolution: RoleResolution) -> Principal:
    """Return the principal or raise AuthenticationException (ERROR fails closed)."""
    if not resolution.is_authenticated or resolution.principal is None:
        raise AuthenticationException()
    return resolution.principal


def require_admin(resolution: RoleResolution, action: AdminAction | str | None = None) -> str:
    """Return the admin id or raise.

    Raises:
        AuthenticationException: no valid session (or the role lookup failed).
        AuthorizationException: authenticated but not an admin.
    """
    principal = require_authenticated(resolution)
    if resolution.role != PrincipalRole.ADMIN or resolution.admin is None:
        action_name = action.value if isinstance(action, AdminAction) else action
        raise AuthorizationException(required_role="admin", action=action_name)
    return principal.id


def require_doctor(resolution: RoleResolution) -> DoctorAccountResult:
    """Return the doctor account or raise.

    Raises:
        AuthenticationException: no valid session (or the role lookup failed).
        IntegrityFaultException: the principal has no role at all.
        AuthorizationException: authenticated as an admin, not a doctor.
    """
    principal = require_authenticated(resolution)
    if resolution.role == PrincipalRole.UNKNOWN:
        raise IntegrityFaultException(principal.id)
    if resolution.role != PrincipalRole.DOCTOR or resolution.doctor is None:
        raise AuthorizationException(required_role="doctor")
    return resolution.doctor
