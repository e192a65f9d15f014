# src/showcase/models/__init__.py
"""SQLAlchemy models for the Showcase application."""

from .project import PROJECT_STATUS_ACTIVE, PROJECT_STATUS_ARCHIVED, Project
from .review import REVIEW_STATUS_PUBLISHED, Review

__all__ = [
    "Project", "PROJECT_STATUS_ACTIVE", "PROJECT_STATUS_ARCHIVED",
    "Review", "REVIEW_STATUS_PUBLISHED",
]
