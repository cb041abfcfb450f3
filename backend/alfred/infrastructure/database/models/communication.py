"""SQLAlchemy ORM model for the Communication entity."""

from sqlalchemy import Boolean, Index, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from alfred.infrastructure.database.base import Base
from alfred.infrastructure.database.models._timestamps import TimestampMixin


class CommunicationModel(TimestampMixin, Base):
    """ORM model — maps to the 'communications' table."""

    __tablename__ = "communications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")
    source: Mapped[str] = mapped_column(String(20), nullable=False)
    project_id: Mapped[str] = mapped_column(String(36), nullable=False)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    posted_at: Mapped[str] = mapped_column(String(40), nullable=False)
    is_ai: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_communications_project_posted", "project_id", "posted_at"),
        Index("ix_communications_type_priority", "type", "priority"),
    )

    def __repr__(self) -> str:
        return f"<CommunicationModel(id={self.id}, type='{self.type}', title='{self.title}')>"
