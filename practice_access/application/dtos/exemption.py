"""DTOs for the exemption registry."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ExemptionEntryResult:
    """Exempted email (stored lowercase-trimmed)."""

    id: str
    email: str
    created_by: str
    created_at: datetime
