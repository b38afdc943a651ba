"""Initial schema — users, contracts, rates, tickets, time entries.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY, UUID

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_uuid = UUID(as_uuid=False)


def upgrade() -> None:
    # Users (technicians, managers, admins)
    op.create_table(
        "users",
        sa.Column("id", _uuid, primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("skills", ARRAY(sa.String(50)), nullable=False, server_default="{}"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("internal_cost_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("default_billing_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("last_assigned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )

    # Contracts
    op.create_table(
        "contracts",
        sa.Column("id", _uuid, primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("customer_id", _uuid, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("idx_contracts_customer", "contracts", ["customer_id"])

    # Per-user billing rates
    op.create_table(
        "user_billing_rates",
        sa.Column("id", _uuid, primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("user_id", _uuid, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("customer_id", _uuid, nullable=True),
        sa.Column("contract_id", _uuid, sa.ForeignKey("contracts.id"), nullable=True),
        sa.Column("service_level", sa.String(20), nullable=True),
        sa.Column("work_type", sa.String(20), nullable=True),
        sa.Column("billing_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("valid_from", sa.Date, nullable=False),
        sa.Column("valid_until", sa.Date, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("idx_user_billing_rates_user", "user_billing_rates", ["user_id"])

    # Tickets
    op.create_table(
        "tickets",
        sa.Column("id", _uuid, primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("customer_id", _uuid, nullable=False),
        sa.Column("contract_id", _uuid, sa.ForeignKey("contracts.id"), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        sa.Column("status", sa.String(30), nullable=False, server_default="new"),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("tags", ARRAY(sa.String(50)), nullable=False, server_default="{}"),
        sa.Column("assigned_to", _uuid, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("sla_response_due", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sla_resolution_due", sa.DateTime(timezone=True), nullable=True),
        sa.Column("first_response_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sla_breached", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("sla_breach_reason", sa.Text, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("idx_tickets_assigned_status", "tickets", ["assigned_to", "status"])
    op.create_index("idx_tickets_customer", "tickets", ["customer_id"])

    # Time entries
    op.create_table(
        "time_entries",
        sa.Column("id", _uuid, primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("ticket_id", _uuid, sa.ForeignKey("tickets.id"), nullable=False),
        sa.Column("user_id", _uuid, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("work_date", sa.Date, nullable=False),
        sa.Column("hours", sa.Numeric(5, 2), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("work_type", sa.String(20), nullable=False, server_default="support"),
        sa.Column("billable", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("billed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("billing_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("cost_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("hours >= 0.25 AND hours <= 24", name="ck_time_entries_hours"),
    )
    op.create_index("idx_time_entries_ticket", "time_entries", ["ticket_id"])


def downgrade() -> None:
    op.drop_table("time_entries")
    op.drop_table("tickets")
    op.drop_table("user_billing_rates")
    op.drop_table("contracts")
    op.drop_table("users")
