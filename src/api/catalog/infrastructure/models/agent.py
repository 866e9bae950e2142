"""SQLAlchemy ORM model for the agents table."""

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class AgentModel(Base, TimestampMixin):
    """ORM model for agents table.

    tenant_id is nullable (General Purpose agents). The foreign key is
    RESTRICT so a tenant can only be removed after its agents have been
    moved or deleted.
    """

    __tablename__ = "agents"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(50), nullable=False)
    workflow_id: Mapped[str] = mapped_column(String(255), nullable=False)
    tenant_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="RESTRICT"),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_agents_slug", "slug", unique=True),
        Index("ix_agents_tenant_id", "tenant_id"),
        Index("ix_agents_workflow_id", "workflow_id"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<AgentModel(id={self.id}, slug={self.slug}, tenant_id={self.tenant_id})>"
