"""Version 1 API endpoints."""

from .endpoints import leaderboard_router, projects_router, reviews_router

__all__ = [
    "leaderboard_router",
    "projects_router",
    "reviews_router",
]
