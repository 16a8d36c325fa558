"""Exemption registry API: public check and admin management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from practice_access.api.v1.dependencies import (
    get_exemption_registry,
    get_exemption_registry_for_write,
    require_admin_resolution,
)
from practice_access.application.dtos.access import RoleResolution
from practice_access.application.services import ExemptionRegistry
from practice_access.core.limiter import limit_exemption_check, limit_writes
from practice_access.schemas.exemption import (
    ExemptionCheckRequest,
    ExemptionCheckResponse,
    ExemptionCreate,
    ExemptionEntryResponse,
)

router = APIRouter()


@router.post("/check-exemption", response_model=ExemptionCheckResponse)
@limit_exemption_check
async def check_exemption(
    request: Request,
    body: ExemptionCheckRequest,
    registry: Annotated[ExemptionRegistry, Depends(get_exemption_registry)],
):
    """Return whether an email is exempt from payment (case-insensitive).

    Rate limited; a store failure surfaces as 503 instead of a false negative.
    """
    entry = await registry.lookup(body.email)
    if entry is None:
        return ExemptionCheckResponse(is_exempted=False)
    return ExemptionCheckResponse(
        is_exempted=True, exemption_data=ExemptionEntryResponse.model_validate(entry)
    )


@router.get("/admin/exemptions", response_model=list[ExemptionEntryResponse])
async def list_exemptions(
    _: Annotated[RoleResolution, Depends(require_admin_resolution)],
    registry: Annotated[ExemptionRegistry, Depends(get_exemption_registry)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List exempted emails (admin only)."""
    entries = await registry.list_entries(skip=skip, limit=limit)
    return [ExemptionEntryResponse.model_validate(e) for e in entries]


@router.post("/admin/exemptions", response_model=ExemptionEntryResponse, status_code=201)
@limit_writes
async def add_exemption(
    request: Request,
    body: ExemptionCreate,
    resolution: Annotated[RoleResolution, Depends(require_admin_resolution)],
    registry: Annotated[ExemptionRegistry, Depends(get_exemption_registry_for_write)],
):
    """Exempt an email from payment (admin only). 409 if already exempt."""
    assert resolution.principal is not None
    entry = await registry.add(body.email, created_by=resolution.principal.id)
    return ExemptionEntryResponse.model_validate(entry)


@router.delete("/admin/exemptions/{entry_id}", status_code=204)
@limit_writes
async def remove_exemption(
    request: Request,
    entry_id: str,
    _: Annotated[RoleResolution, Depends(require_admin_resolution)],
    registry: Annotated[ExemptionRegistry, Depends(get_exemption_registry_for_write)],
):
    """Remove an exemption (admin only). 404 if absent."""
    await registry.remove(entry_id)
    return Response(status_code=204)
