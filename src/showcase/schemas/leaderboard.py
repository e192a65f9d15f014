"""Leaderboard Pydantic schemas."""

from pydantic import BaseModel, Field

from showcase.schemas.project import ProjectPublic


class LeaderboardResponse(BaseModel):
    """A ranked leaderboard split into podium and remainder."""

    window: str
    total: int = Field(..., description="Number of ranked projects")
    podium: list[ProjectPublic] = Field(default_factory=list, description="Top three, when filled")
    rest: list[ProjectPublic] = Field(default_factory=list)
