"""Pydantic schemas for API request/response validation."""

from .leaderboard import LeaderboardResponse
from .project import OwnerDashboardResponse, ProjectCreate, ProjectDetail, ProjectPublic
from .review import (
    HelpfulResponse,
    ReviewCreate,
    ReviewPageResponse,
    ReviewResponse,
    ReviewSubmitResponse,
)

__all__ = [
    "HelpfulResponse",
    "LeaderboardResponse",
    "OwnerDashboardResponse",
    "ProjectCreate",
    "ProjectDetail",
    "ProjectPublic",
    "ReviewCreate",
    "ReviewPageResponse",
    "ReviewResponse",
    "ReviewSubmitResponse",
]
