"""Access guard API schemas."""

from pydantic import Field

from practice_access.domain.access_policy import AccessDecision
from practice_access.domain.enums import PrincipalRole
from practice_access.schemas.common import CamelModel


class AccessDecisionResponse(CamelModel):
    """Allow, or where to send the client instead."""

    allowed: bool
    redirect_to: str | None = None
    sign_out: bool = False
    reason: str = "ok"

    @classmethod
    def from_decision(cls, decision: AccessDecision) -> "AccessDecisionResponse":
        return cls(
            allowed=decision.allowed,
            redirect_to=decision.redirect_to,
            sign_out=decision.sign_out,
            reason=decision.reason,
        )


class RoleResponse(CamelModel):
    """Resolved role of the current principal."""

    role: PrincipalRole
    principal_id: str | None = None
    email: str | None = Field(default=None, description="Email from the session")
