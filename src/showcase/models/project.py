# src/showcase/models/project.py
"""SQLAlchemy models for published projects."""

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, Double, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from showcase.db.session import Base
from showcase.db.time import utcnow

PROJECT_STATUS_ACTIVE = "active"
PROJECT_STATUS_ARCHIVED = "archived"


class Project(Base):
    """A work sample published behind an anonymous share link.

    The aggregate pair (``average_rating``, ``total_reviews``) is written only
    by the rating aggregator. ``views`` is bumped through the store's atomic
    increment on every public page load.
    """

    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint("status IN ('active', 'archived')", name="ck_projects_status"),
        Index("ix_projects_owner_status", "owner_id", "status"),
        Index("ix_projects_leaderboard", "status", "average_rating", "total_reviews"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Public token embedded in the review URL; decoupled from the internal id.
    share_code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_ref: Mapped[str | None] = mapped_column(Text, nullable=True)
    tech_stack: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Opaque subject of the owner's bearer token.
    owner_id: Mapped[str] = mapped_column(String(128), nullable=False)
    owner_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=PROJECT_STATUS_ACTIVE,
    )
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    average_rating: Mapped[float] = mapped_column(Double, nullable=False, default=0.0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, share_code={self.share_code}, status={self.status})>"
