"""Admin action log ORM model. Append-only record of admin verification actions."""

from typing import Any

from sqlalchemy import Connection, String, Text, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from practice_access.infrastructure.persistence.database import Base
from practice_access.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
)


class AdminActionLog(CuidMixin, CreatedAtMixin, Base):
    """Who did what to which doctor, and from where. No update/delete."""

    __tablename__ = "admin_activity_logs"

    admin_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    details: Mapped[str] = mapped_column(Text, nullable=False)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)


@event.listens_for(AdminActionLog, "before_update")
def _prevent_action_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: AdminActionLog
) -> None:
    """Admin action log entries are append-only; updates are forbidden."""
    raise ValueError("Admin action log entries are immutable and cannot be updated.")


@event.listens_for(AdminActionLog, "before_delete")
def _prevent_action_log_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AdminActionLog
) -> None:
    """Admin action log entries cannot be deleted."""
    raise ValueError("Admin action log entries cannot be deleted.")
