"""SQLAlchemy ORM models for action items and risk assessments."""

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from alfred.infrastructure.database.base import Base
from alfred.infrastructure.database.models._timestamps import TimestampMixin


class ActionItemModel(TimestampMixin, Base):
    """ORM model — maps to the 'action_items' table."""

    __tablename__ = "action_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="new")
    due_date: Mapped[str] = mapped_column(String(40), nullable=False)
    project_id: Mapped[str] = mapped_column(String(36), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    assigned_to: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        Index("ix_action_items_project_status", "project_id", "status"),
        Index("ix_action_items_priority_due", "priority", "due_date"),
    )

    def __repr__(self) -> str:
        return f"<ActionItemModel(id={self.id}, status='{self.status}')>"


class RiskAssessmentModel(TimestampMixin, Base):
    """ORM model — maps to the 'risk_assessments' table."""

    __tablename__ = "risk_assessments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    project_id: Mapped[str] = mapped_column(String(36), nullable=False)
    risk_type: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    impact: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    probability: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    mitigation: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="open")

    __table_args__ = (
        Index("ix_risk_assessments_project_impact", "project_id", "impact"),
    )
