"""Access guard API: client pre-navigation check and the public-route guard.

Both use the same AccessGuard as the edge middleware, so a client never sees
a different decision than the edge would make.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from practice_access.api.v1.dependencies import (
    get_access_guard,
    get_principal,
    get_role_resolution,
)
from practice_access.application.dtos.access import Principal, RoleResolution
from practice_access.application.services import AccessGuard
from practice_access.schemas.access import AccessDecisionResponse, RoleResponse

router = APIRouter()


@router.get("/check", response_model=AccessDecisionResponse)
async def check_access(
    principal: Annotated[Principal | None, Depends(get_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
    path: str = Query(..., min_length=1, description="Path the client is about to open"),
):
    """Decide whether the caller may open path (allow, or redirect target)."""
    decision = await guard.evaluate(principal, path=path)
    return AccessDecisionResponse.from_decision(decision)


@router.get("/public", response_model=AccessDecisionResponse)
async def check_public_access(
    principal: Annotated[Principal | None, Depends(get_principal)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
):
    """Guard for login/registration pages: signed-in principals are sent home."""
    decision = await guard.evaluate_public(principal)
    return AccessDecisionResponse.from_decision(decision)


@router.get("/me", response_model=RoleResponse)
async def get_my_role(
    resolution: Annotated[RoleResolution, Depends(get_role_resolution)],
):
    """Return the caller's resolved role (Unauthenticated when no valid session)."""
    principal = resolution.principal
    return RoleResponse(
        role=resolution.role,
        principal_id=principal.id if principal else None,
        email=principal.email if principal else None,
    )
