"""Exempted user ORM model. Email is stored lowercase-trimmed and unique."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from practice_access.infrastructure.persistence.database import Base
from practice_access.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
)


class ExemptedUser(CuidMixin, CreatedAtMixin, Base):
    """Email exempt from subscription enforcement. Table: exempted_users."""

    __tablename__ = "exempted_users"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    created_by: Mapped[str] = mapped_column(String, nullable=False)
