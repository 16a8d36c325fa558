"""Doctor ORM model: profile plus the subscription fields read by the access guard."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from practice_access.infrastructure.persistence.database import Base
from practice_access.infrastructure.persistence.models.mixins import TimestampMixin


class Doctor(TimestampMixin, Base):
    """Doctor account. Table: doctors. id is the principal id."""

    __tablename__ = "doctors"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    cedula: Mapped[str | None] = mapped_column(String(64), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(32), nullable=True)
    license_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    specialty: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default=text("'doctor'")
    )
    subscription_status: Mapped[str] = mapped_column(
        String(32), nullable=False, server_default=text("'pending_verification'")
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    last_payment_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    next_payment_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    payment_proof_ref: Mapped[str | None] = mapped_column(String(512), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "subscription_status IN ('pending_verification', 'active', 'expired')",
            name="ck_doctors_subscription_status",
        ),
        CheckConstraint("role IN ('doctor', 'admin')", name="ck_doctors_role"),
        Index("ix_doctors_status_next_payment", "subscription_status", "next_payment_date"),
    )
