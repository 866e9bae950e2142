"""SQLAlchemy ORM models for the dashboards and dashboard_agents tables."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin, utc_now


class DashboardModel(Base, TimestampMixin):
    """ORM model for dashboards table."""

    __tablename__ = "dashboards"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(50), nullable=False)
    tenant_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="RESTRICT"),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_dashboards_slug", "slug", unique=True),
        Index("ix_dashboards_tenant_id", "tenant_id"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<DashboardModel(id={self.id}, slug={self.slug})>"


class DashboardAgentModel(Base):
    """ORM model for dashboard_agents join table.

    The composite primary key allows an agent at most once per dashboard.
    Rows are removed by the database when either the dashboard or the
    agent is deleted.
    """

    __tablename__ = "dashboard_agents"

    dashboard_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("dashboards.id", ondelete="CASCADE"),
        primary_key=True,
    )
    agent_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("agents.id", ondelete="CASCADE"),
        primary_key=True,
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        nullable=False,
    )

    __table_args__ = (Index("ix_dashboard_agents_agent_id", "agent_id"),)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<DashboardAgentModel(dashboard_id={self.dashboard_id}, "
            f"agent_id={self.agent_id}, order={self.order})>"
        )
