"""SQLAlchemy ORM model for the Project entity."""

from sqlalchemy import Float, Index, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from alfred.infrastructure.database.base import Base
from alfred.infrastructure.database.models._timestamps import TimestampMixin


class ProjectModel(TimestampMixin, Base):
    """ORM model — maps to the 'projects' table.

    The location is flattened into columns so city/state filters can use
    an index; the weather snapshot is kept as an embedded JSON document.
    """

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False)
    state: Mapped[str] = mapped_column(String(120), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    capacity: Mapped[str] = mapped_column(String(50), nullable=False)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    start_date: Mapped[str] = mapped_column(String(40), nullable=False)
    end_date: Mapped[str] = mapped_column(String(40), nullable=False)
    weather: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("ix_projects_status", "status"),
        Index("ix_projects_location", "city", "state"),
    )

    def __repr__(self) -> str:
        return f"<ProjectModel(id={self.id}, name='{self.name}', progress={self.progress})>"
