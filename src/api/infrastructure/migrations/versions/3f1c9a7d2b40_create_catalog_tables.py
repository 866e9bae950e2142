"""create catalog tables

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-02-02 10:15:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_tenants"),
    )
    # Tenant names are globally unique and compared exactly
    op.create_index("ix_tenants_name", "tenants", ["name"], unique=True)

    op.create_table(
        "agents",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=50), nullable=False),
        sa.Column("workflow_id", sa.String(length=255), nullable=False),
        sa.Column("tenant_id", sa.String(length=26), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_agents"),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name="fk_agents_tenant_id_tenants",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_agents_slug", "agents", ["slug"], unique=True)
    op.create_index("ix_agents_tenant_id", "agents", ["tenant_id"], unique=False)
    op.create_index("ix_agents_workflow_id", "agents", ["workflow_id"], unique=False)

    op.create_table(
        "dashboards",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=50), nullable=False),
        sa.Column("tenant_id", sa.String(length=26), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_dashboards"),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name="fk_dashboards_tenant_id_tenants",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_dashboards_slug", "dashboards", ["slug"], unique=True)
    op.create_index(
        "ix_dashboards_tenant_id", "dashboards", ["tenant_id"], unique=False
    )

    op.create_table(
        "dashboard_agents",
        sa.Column("dashboard_id", sa.String(length=26), nullable=False),
        sa.Column("agent_id", sa.String(length=26), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint(
            "dashboard_id", "agent_id", name="pk_dashboard_agents"
        ),
        sa.ForeignKeyConstraint(
            ["dashboard_id"],
            ["dashboards.id"],
            name="fk_dashboard_agents_dashboard_id_dashboards",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["agent_id"],
            ["agents.id"],
            name="fk_dashboard_agents_agent_id_agents",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_dashboard_agents_agent_id", "dashboard_agents", ["agent_id"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_dashboard_agents_agent_id", table_name="dashboard_agents")
    op.drop_table("dashboard_agents")
    op.drop_index("ix_dashboards_tenant_id", table_name="dashboards")
    op.drop_index("ix_dashboards_slug", table_name="dashboards")
    op.drop_table("dashboards")
    op.drop_index("ix_agents_workflow_id", table_name="agents")
    op.drop_index("ix_agents_tenant_id", table_name="agents")
    op.drop_index("ix_agents_slug", table_name="agents")
    op.drop_table("agents")
    op.drop_index("ix_tenants_name", table_name="tenants")
    op.drop_table("tenants")
