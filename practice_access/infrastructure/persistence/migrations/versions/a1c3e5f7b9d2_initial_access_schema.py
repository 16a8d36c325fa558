"""initial_access_schema

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-19

admins, doctors, exempted_users and the append-only admin_activity_logs.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1c3e5f7b9d2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create access tables, indexes and the action log immutability trigger."""
    op.create_table(
        "admins",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_admins_email"),
    )
    op.create_table(
        "doctors",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("cedula", sa.String(length=64), nullable=True),
        sa.Column("gender", sa.String(length=32), nullable=True),
        sa.Column("license_number", sa.String(length=64), nullable=True),
        sa.Column("specialty", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=16), server_default=sa.text("'doctor'"), nullable=False),
        sa.Column(
            "subscription_status",
            sa.String(length=32),
            server_default=sa.text("'pending_verification'"),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("last_payment_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("next_payment_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("payment_proof_ref", sa.String(length=512), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "subscription_status IN ('pending_verification', 'active', 'expired')",
            name="ck_doctors_subscription_status",
        ),
        sa.CheckConstraint("role IN ('doctor', 'admin')", name="ck_doctors_role"),
    )
    op.create_index("ix_doctors_email", "doctors", ["email"])
    op.create_index(
        "ix_doctors_status_next_payment", "doctors", ["subscription_status", "next_payment_date"]
    )
    op.create_table(
        "exempted_users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_exempted_users_email"),
    )
    op.create_table(
        "admin_activity_logs",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("admin_id", sa.String(), nullable=False),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("details", sa.Text(), nullable=False),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admin_activity_logs_admin_id", "admin_activity_logs", ["admin_id"])
    op.create_index("ix_admin_activity_logs_created_at", "admin_activity_logs", ["created_at"])
    op.execute(
        """
        CREATE OR REPLACE FUNCTION prevent_admin_activity_log_mutation()
        RETURNS TRIGGER
        LANGUAGE plpgsql
        AS $$
        BEGIN
            RAISE EXCEPTION 'admin_activity_logs rows are append-only and cannot be updated or deleted'
                USING ERRCODE = 'integrity_constraint_violation';
        END;
        $$
        """
    )
    op.execute(
        "CREATE TRIGGER prevent_admin_activity_log_update_delete "
        "BEFORE UPDATE OR DELETE ON admin_activity_logs "
        "FOR EACH ROW EXECUTE PROCEDURE prevent_admin_activity_log_mutation()"
    )


def downgrade() -> None:
    """Drop access tables."""
    op.execute(
        "DROP TRIGGER IF EXISTS prevent_admin_activity_log_update_delete ON admin_activity_logs"
    )
    op.execute("DROP FUNCTION IF EXISTS prevent_admin_activity_log_mutation()")
    op.drop_index("ix_admin_activity_logs_created_at", table_name="admin_activity_logs")
    op.drop_index("ix_admin_activity_logs_admin_id", table_name="admin_activity_logs")
    op.drop_table("admin_activity_logs")
    op.drop_table("exempted_users")
    op.drop_index("ix_doctors_status_next_payment", table_name="doctors")
    op.drop_index("ix_doctors_email", table_name="doctors")
    op.drop_table("doctors")
    op.drop_table("admins")
