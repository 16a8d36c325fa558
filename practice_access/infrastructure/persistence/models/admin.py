"""Admin ORM model. Keyed by the identity provider's principal id."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from practice_access.infrastructure.persistence.database import Base
from practice_access.infrastructure.persistence.models.mixins import CreatedAtMixin


class Admin(CreatedAtMixin, Base):
    """Administrator. Table: admins. Disjoint from doctors by principal id."""

    __tablename__ = "admins"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
