# src/showcase/api/v1/endpoints/leaderboard.py
"""Public leaderboard endpoint."""

from fastapi import APIRouter, Query

from showcase.core.settings import settings
from showcase.schemas.leaderboard import LeaderboardResponse
from showcase.schemas.project import ProjectPublic
from showcase.services.errors import ShowcaseError
from showcase.services.leaderboard import parse_time_window, split_podium, top_projects

from ..dependencies import StoreDep, http_error

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    store: StoreDep,
    window: str = Query("all", description="One of: all, week, month"),
    limit: int = Query(
        settings.leaderboard_default_limit,
        ge=1,
        le=100,
        description="Maximum number of ranked projects",
    ),
) -> LeaderboardResponse:
    """Return the top active projects that have at least one review."""
    try:
        time_window = parse_time_window(window)
        projects = top_projects(store, time_window, limit)
    except ShowcaseError as err:
        raise http_error(err) from err
    podium, rest = split_podium(projects)
    return LeaderboardResponse(
        window=time_window.value,
        total=len(projects),
        podium=[ProjectPublic.model_validate(project) for project in podium],
        rest=[ProjectPublic.model_validate(project) for project in rest],
    )
