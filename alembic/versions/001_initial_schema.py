"""Initial schema — sites, crews, tickets and their history.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Sites
    op.create_table(
        "sites",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(50), unique=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("region", sa.String(50), nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("detail", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_sites_region", "sites", ["region"])

    # Crews
    op.create_table(
        "crews",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(50), unique=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False, server_default=""),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("category", sa.String(1), nullable=True),
        sa.Column("state", sa.String(30), nullable=True),
        sa.Column("skill_1", sa.String(100), nullable=True),
        sa.Column("skill_2", sa.String(100), nullable=True),
        sa.Column("skill_3", sa.String(100), nullable=True),
    )
    op.create_index("idx_crews_category", "crews", ["category"])

    # Tickets
    op.create_table(
        "tickets",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("ticket_source", sa.String(100), nullable=True),
        sa.Column("site_id", sa.String(50), nullable=True),
        sa.Column("site_name", sa.String(200), nullable=True),
        sa.Column("state", sa.String(30), nullable=False, server_default="NUEVO"),
        sa.Column("task_category", sa.String(100), nullable=True),
        sa.Column("task_subcategory", sa.String(100), nullable=True),
        sa.Column("fault_level", sa.String(50), nullable=True),
        sa.Column("platform_affected", sa.String(100), nullable=True),
        sa.Column("attention_type", sa.String(100), nullable=True),
        sa.Column("service_affected", sa.String(100), nullable=True),
        sa.Column("crew_category", sa.String(1), nullable=True),
        sa.Column("created_by", sa.String(100), nullable=True),
        sa.Column("fault_occur_time", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_tickets_state", "tickets", ["state"])
    op.create_index("idx_tickets_site", "tickets", ["site_id"])

    # Ticket state catalog
    op.create_table(
        "ticket_states_catalog",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("code", sa.Integer, unique=True, nullable=False),
        sa.Column("name", sa.String(30), unique=True, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
    )

    # Ticket state history / crew assignments
    op.create_table(
        "crew_ticket_states",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "ticket_id", sa.Integer, sa.ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("crew_id", sa.Integer, sa.ForeignKey("crews.id"), nullable=True),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(100), nullable=False),
        sa.Column("state", sa.String(30), nullable=False),
    )
    op.create_index("idx_crew_ticket_states_ticket", "crew_ticket_states", ["ticket_id"])
    op.create_index("idx_crew_ticket_states_crew", "crew_ticket_states", ["crew_id"])

    # Crew route tracking
    op.create_table(
        "crew_routes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("crew_id", sa.Integer, sa.ForeignKey("crews.id"), nullable=False),
        sa.Column("day", sa.Date, nullable=False),
        sa.Column("at", sa.Time, nullable=False),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
    )
    op.create_index("idx_crew_routes_crew_day", "crew_routes", ["crew_id", "day"])


def downgrade() -> None:
    op.drop_table("crew_routes")
    op.drop_table("crew_ticket_states")
    op.drop_table("ticket_states_catalog")
    op.drop_table("tickets")
    op.drop_table("crews")
    op.drop_table("sites")
