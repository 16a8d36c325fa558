"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the current principal and the
application services. All services are built from infrastructure
implementations here; routes depend only on these dependencies.

Reads use get_db; routes that change state use get_db_transactional. Admin
actions write the action log through get_audit_db so a failed log insert never
rolls back the doctor update.
"""

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from practice_access.application.dtos.access import Principal, RoleResolution
from practice_access.application.dtos.doctor import DoctorAccountResult
from practice_access.application.interfaces.services import (
    INotificationService,
    IProofStore,
)
from practice_access.application.services import (
    AccessGuard,
    AdminVerificationService,
    ExemptionRegistry,
    RoleResolver,
    SubscriptionService,
    require_admin,
    require_doctor,
)
from practice_access.application.use_cases import RunExpirySweepUseCase
from practice_access.core.config import get_settings
from practice_access.core.constants import SCHEDULER_SECRET_HEADER
from practice_access.domain.access_policy import AccessDecision
from practice_access.domain.entities.subscription import SubscriptionStateMachine
from practice_access.domain.exceptions import AuthorizationException
from practice_access.infrastructure.external.storage import StorageFactory
from practice_access.infrastructure.persistence import database
from practice_access.infrastructure.persistence.database import (
    get_audit_db,
    get_db,
    get_db_transactional,
)
from practice_access.infrastructure.persistence.repositories import (
    AdminActionLogRepository,
    AdminRepository,
    DoctorRepository,
    ExemptionRepository,
)
from practice_access.infrastructure.security.jwt import principal_from_token
from practice_access.infrastructure.services import LogOnlyNotificationService

_http_bearer = HTTPBearer(auto_error=False)


def _store_timeout() -> float:
    return get_settings().record_store_timeout_seconds


def _state_machine() -> SubscriptionStateMachine:
    settings = get_settings()
    return SubscriptionStateMachine(
        grace_window_days=settings.grace_window_days,
        renewal_period_days=settings.renewal_period_days,
    )


# ---- Principal and role ----


async def get_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> Principal | None:
    """Principal from the Bearer token, else from the session cookie; None if absent or invalid."""
    token = credentials.credentials if credentials else None
    if not token:
        token = request.cookies.get(get_settings().session_cookie_name)
    return principal_from_token(token)


async def get_role_resolver(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RoleResolver:
    return RoleResolver(AdminRepository(db), DoctorRepository(db), timeout=_store_timeout())


async def get_role_resolution(
    principal: Annotated[Principal | None, Depends(get_principal)],
    resolver: Annotated[RoleResolver, Depends(get_role_resolver)],
) -> RoleResolution:
    """Resolve the caller's role once per request (never raises)."""
    return await resolver.resolve(principal)


async def require_admin_resolution(
    resolution: Annotated[RoleResolution, Depends(get_role_resolution)],
) -> RoleResolution:
    """Role resolution of an authenticated admin; 401/403 otherwise."""
    require_admin(resolution)
    return resolution


async def get_current_doctor(
    resolution: Annotated[RoleResolution, Depends(get_role_resolution)],
) -> DoctorAccountResult:
    """Doctor account of the caller; 401, 403 (no role / not a doctor) otherwise."""
    return require_doctor(resolution)


# ---- Exemptions and access guard ----


async def get_exemption_registry(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ExemptionRegistry:
    """Exemption registry for lookups."""
    return ExemptionRegistry(ExemptionRepository(db), timeout=_store_timeout())


async def get_exemption_registry_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ExemptionRegistry:
    """Exemption registry for add/remove (transactional)."""
    return ExemptionRegistry(ExemptionRepository(db), timeout=_store_timeout())


async def get_access_guard(
    resolver: Annotated[RoleResolver, Depends(get_role_resolver)],
    registry: Annotated[ExemptionRegistry, Depends(get_exemption_registry)],
) -> AccessGuard:
    return AccessGuard(resolver, registry)


async def evaluate_with_database(
    principal: Principal | None, path: str
) -> AccessDecision:
    """Default edge evaluator (app.state.access_evaluator): one session per request."""
    timeout = _store_timeout()
    async with database.session_scope() as session:
        guard = AccessGuard(
            RoleResolver(AdminRepository(session), DoctorRepository(session), timeout=timeout),
            ExemptionRegistry(ExemptionRepository(session), timeout=timeout),
        )
        return await guard.evaluate(principal, path=path)


# ---- Proof store and notifications ----


def get_proof_store(request: Request) -> IProofStore:
    """Proof store created at startup; falls back to the factory (e.g. lifespan not run)."""
    store = getattr(request.app.state, "proof_store", None)
    if store is None:
        store = StorageFactory.create_proof_store()
        request.app.state.proof_store = store
    return store


async def get_notifier(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> INotificationService:
    return LogOnlyNotificationService(AdminRepository(db))


# ---- Workflows ----


async def get_subscription_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    proof_store: Annotated[IProofStore, Depends(get_proof_store)],
    notifier: Annotated[INotificationService, Depends(get_notifier)],
) -> SubscriptionService:
    """Registration and payment proof workflow (transactional)."""
    settings = get_settings()
    return SubscriptionService(
        DoctorRepository(db),
        ExemptionRegistry(ExemptionRepository(db), timeout=settings.record_store_timeout_seconds),
        proof_store,
        notifier,
        _state_machine(),
        timeout=settings.record_store_timeout_seconds,
        max_proof_size=settings.max_proof_size,
        allowed_proof_types=settings.allowed_proof_type_set,
        reminder_window_days=settings.reminder_window_days,
    )


async def get_admin_verification_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    audit_db: Annotated[AsyncSession, Depends(get_audit_db)],
) -> AdminVerificationService:
    """Admin actions: doctor update and action log entry on separate sessions."""
    return AdminVerificationService(
        DoctorRepository(db),
        AdminActionLogRepository(audit_db),
        _state_machine(),
        timeout=_store_timeout(),
    )


async def get_admin_read_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AdminVerificationService:
    """Admin read views (doctor queue, action log)."""
    return AdminVerificationService(
        DoctorRepository(db),
        AdminActionLogRepository(db),
        _state_machine(),
        timeout=_store_timeout(),
    )


async def get_expiry_sweep(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    notifier: Annotated[INotificationService, Depends(get_notifier)],
) -> RunExpirySweepUseCase:
    return RunExpirySweepUseCase(
        DoctorRepository(db),
        notifier,
        _state_machine(),
        reminder_window_days=get_settings().reminder_window_days,
    )


async def verify_scheduler_secret(
    x_scheduler_secret: Annotated[
        str | None, Header(alias=SCHEDULER_SECRET_HEADER)
    ] = None,
) -> None:
    """Require the shared scheduler secret. Unset secret means the endpoint is closed."""
    expected = get_settings().scheduler_secret
    if expected is None or not expected.get_secret_value():
        raise AuthorizationException(
            action="check_payment_status", message="Scheduler secret is not configured"
        )
    if not x_scheduler_secret or not secrets.compare_digest(
        x_scheduler_secret.encode(), expected.get_secret_value().encode()
    ):
        raise AuthorizationException(
            action="check_payment_status", message="Invalid scheduler secret"
        )
