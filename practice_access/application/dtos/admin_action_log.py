"""DTOs for the admin action log. Append-only."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AdminActionLogCreate:
    """Input for appending one admin action log record. Append-only; no update."""

    admin_id: str
    action: str
    details: str
    user_agent: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True)
class AdminActionLogResult:
    """Single admin action log entry (read-model for list)."""

    id: str
    admin_id: str
    action: str
    details: str
    user_agent: str | None
    ip_address: str | None
    created_at: datetime
