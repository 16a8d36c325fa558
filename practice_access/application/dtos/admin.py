"""DTOs for administrators."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AdminResult:
    """Administrator record (id is the principal id)."""

    id: str
    email: str
    full_name: str | None = None
    created_at: datetime | None = None
