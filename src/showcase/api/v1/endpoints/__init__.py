# src/showcase/api/v1/endpoints/__init__.py
"""API endpoint routers."""

from .leaderboard import router as leaderboard_router
from .projects import router as projects_router
from .reviews import router as reviews_router

__all__ = [
    "leaderboard_router",
    "projects_router",
    "reviews_router",
]
