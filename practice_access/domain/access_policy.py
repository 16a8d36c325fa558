"""Access policy: the single decision function behind every enforcement point.

The edge check (per request), the client pre-navigation guard and the
public-route guard all build an AccessContext from freshly fetched records and
call decide(); none of them branch on roles or subscription fields themselves.
"""

from dataclasses import dataclass

from practice_access.domain.entities.subscription import SubscriptionState
from practice_access.domain.enums import DoctorRole, PrincipalRole, RouteArea

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
ADMIN_HOME_PATH = "/admin"
PAYMENT_REQUIRED_PATH = "/payment-required"
NO_ROLE_PATH = "/?error=no-role"

# Path prefixes enforced at the edge, mapped to their area.
PROTECTED_PREFIXES: dict[str, RouteArea] = {
    "/dashboard": RouteArea.DASHBOARD,
    "/profile": RouteArea.PROFILE,
    "/admin": RouteArea.ADMIN,
}


def area_for_path(path: str) -> RouteArea:
    """Return the area a path belongs to; anything outside the protected prefixes is public."""
    for prefix, area in PROTECTED_PREFIXES.items():
        if path == prefix or path.startswith(prefix + "/"):
            return area
    return RouteArea.PUBLIC


@dataclass(frozen=True)
class AccessContext:
    """Request-scoped inputs to the policy, built once per evaluation.

    subscription and doctor_role are set only for DOCTOR principals.
    """

    role: PrincipalRole
    principal_id: str | None = None
    email: str | None = None
    doctor_role: DoctorRole | None = None
    subscription: SubscriptionState | None = None
    is_exempt: bool = False


@dataclass(frozen=True)
class AccessDecision:
    """Allow, or redirect (optionally signing the session out)."""

    allowed: bool
    redirect_to: str | None = None
    sign_out: bool = False
    reason: str = "ok"

    @classmethod
    def allow(cls, reason: str = "ok") -> "AccessDecision":
        return cls(allowed=True, reason=reason)

    @classmethod
    def redirect(
        cls, target: str, reason: str, *, sign_out: bool = False
    ) -> "AccessDecision":
        return cls(allowed=False, redirect_to=target, sign_out=sign_out, reason=reason)


def passes_subscription(context: AccessContext) -> bool:
    """Subscription enforcement for a doctor.

    Admin-equivalent doctors and exempt emails pass; otherwise the account must
    be active (is_active) and not expired. is_active=False always fails.
    """
    if context.doctor_role == DoctorRole.ADMIN:
        return True
    if context.is_exempt:
        return True
    if context.subscription is None:
        return False
    return context.subscription.grants_access()


def decide(area: RouteArea, context: AccessContext) -> AccessDecision:
    """Decide whether a principal may enter an area.

    Protected areas fail closed: no principal or a failed lookup goes to
    login; a principal with no role is signed out. The public area is the
    inverse guard used on login/registration pages: signed-in principals are
    sent to their home instead.

    Admin pages require the ADMIN role, which only the admins table grants. A
    doctor record whose own role field says admin still resolves to DOCTOR: it
    skips subscription enforcement but is redirected away from admin pages.
    """
    role = context.role

    if role in (PrincipalRole.UNAUTHENTICATED, PrincipalRole.ERROR):
        if area == RouteArea.PUBLIC:
            return AccessDecision.allow(reason=role.value)
        return AccessDecision.redirect(LOGIN_PATH, reason=role.value)

    if role == PrincipalRole.UNKNOWN:
        if area == RouteArea.PUBLIC:
            return AccessDecision.allow(reason="no_role")
        return AccessDecision.redirect(NO_ROLE_PATH, reason="no_role", sign_out=True)

    if role == PrincipalRole.ADMIN:
        if area in (RouteArea.ADMIN, RouteArea.PROFILE):
            return AccessDecision.allow()
        return AccessDecision.redirect(ADMIN_HOME_PATH, reason="admin_home")

    # DOCTOR
    if area == RouteArea.ADMIN:
        return AccessDecision.redirect(DASHBOARD_PATH, reason="admin_required")
    if area == RouteArea.PROFILE:
        return AccessDecision.allow()
    if area == RouteArea.DASHBOARD:
        if passes_subscription(context):
            return AccessDecision.allow()
        return AccessDecision.redirect(
            PAYMENT_REQUIRED_PATH, reason="subscription_inactive"
        )
    if passes_subscription(context):
        return AccessDecision.redirect(DASHBOARD_PATH, reason="doctor_home")
    return AccessDecision.redirect(PAYMENT_REQUIRED_PATH, reason="subscription_inactive")
