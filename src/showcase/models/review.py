# src/showcase/models/review.py
"""Models capturing anonymous reviews of projects."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from showcase.db.session import Base
from showcase.db.time import utcnow

REVIEW_STATUS_PUBLISHED = "published"


class Review(Base):
    """A single anonymous rating plus free-text review of one project.

    Reviews are append-only. ``helpful_count`` only grows through the store's
    atomic increment; ``flag_count`` is reserved and never incremented.
    """

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 10", name="ck_reviews_rating"),
        Index("ix_reviews_project_status_created", "project_id", "status", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id"),
        nullable=False,
    )

    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    helpful_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    flag_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=REVIEW_STATUS_PUBLISHED,
    )

    # SHA-256 of weak client signals; anti-abuse only, never serialized.
    fingerprint_hash: Mapped[str] = mapped_column(String(64), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, project_id={self.project_id}, rating={self.rating})>"
