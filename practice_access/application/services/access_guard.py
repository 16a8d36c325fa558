"""Access guard: builds the request-scoped AccessContext and applies the access policy.

The same guard backs the edge middleware, the pre-navigation check endpoint
and the public-route check, so all enforcement points agree.
"""

from __future__ import annotations

import logging

from practice_access.application.dtos.access import Principal, RoleResolution
from practice_access.application.services.exemption_registry import ExemptionRegistry
from practice_access.application.services.role_resolver import RoleResolver
from practice_access.domain.access_policy import (
    AccessContext,
    AccessDecision,
    area_for_path,
    decide,
)
from practice_access.domain.enums import PrincipalRole, RouteArea
from practice_access.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class AccessGuard:
    """Read-only request-time decision. Never raises; failures redirect to login."""

    def __init__(self, role_resolver: RoleResolver, exemption_registry: ExemptionRegistry) -> None:
        self.role_resolver = role_resolver
        self.exemption_registry = exemption_registry

    async def build_context(self, resolution: RoleResolution) -> AccessContext:
        """Bundle role, doctor fields and exemption status for one evaluation."""
        principal = resolution.principal
        if resolution.role != PrincipalRole.DOCTOR or resolution.doctor is None:
            return AccessContext(
                role=resolution.role,
                principal_id=principal.id if principal else None,
                email=principal.email if principal else None,
            )
        doctor = resolution.doctor
        email = doctor.email or (principal.email if principal else None)
        return AccessContext(
            role=PrincipalRole.DOCTOR,
            principal_id=doctor.id,
            email=email,
            doctor_role=doctor.role,
            subscription=doctor.subscription,
            is_exempt=await self.exemption_registry.is_exempt(email),
        )

    async def resolve_context(self, principal: Principal | None) -> AccessContext:
        resolution = await self.role_resolver.resolve(principal)
        return await self.build_context(resolution)

    @traced("access_guard.evaluate")
    async def evaluate(
        self,
        principal: Principal | None,
        *,
        path: str | None = None,
        area: RouteArea | None = None,
    ) -> AccessDecision:
        """Decide for a path (edge, pre-navigation) or an explicit area (public guard)."""
        target_area = area or area_for_path(path or "/")
        context = await self.resolve_context(principal)
        decision = decide(target_area, context)
        add_span_attributes(
            role=context.role.value,
            allowed=decision.allowed,
            reason=decision.reason,
        )
        if not decision.allowed:
            logger.info(
                "Access redirected: area=%s role=%s reason=%s to=%s",
                target_area.value,
                context.role.value,
                decision.reason,
                decision.redirect_to,
            )
        return decision

    async def evaluate_public(self, principal: Principal | None) -> AccessDecision:
        """Inverse guard for login/registration pages."""
        return await self.evaluate(principal, area=RouteArea.PUBLIC)
