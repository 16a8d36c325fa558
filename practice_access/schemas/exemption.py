"""Exemption registry API schemas."""

from datetime import datetime

from pydantic import Field

from practice_access.schemas.common import CamelModel


class ExemptionCheckRequest(CamelModel):
    """Body for POST /check-exemption."""

    email: str = Field(..., min_length=1, max_length=320)


class ExemptionEntryResponse(CamelModel):
    """One exempted email."""

    id: str
    email: str
    created_by: str
    created_at: datetime


class ExemptionCheckResponse(CamelModel):
    """Response for POST /check-exemption."""

    is_exempted: bool
    exemption_data: ExemptionEntryResponse | None = None


class ExemptionCreate(CamelModel):
    """Body for POST /admin/exemptions."""

    email: str = Field(..., min_length=3, max_length=320)
