"""Project-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from showcase.core.settings import settings


class ProjectCreate(BaseModel):
    """Schema for publishing a new project."""

    title: str = Field(..., description="Project title (max 100 characters)")
    url: str = Field(..., description="Absolute http(s) URL of the work sample")
    description: str = Field(..., description="Short description (max 500 characters)")
    tech_stack: list[str] = Field(default_factory=list, description="Up to 5 technology tags")
    thumbnail_ref: str | None = Field(None, description="Opaque reference to an uploaded image")
    owner_name: str | None = Field(None, description="Display name shown to the owner only")


class ProjectPublic(BaseModel):
    """Project as shown to anonymous visitors; never exposes the owner."""

    id: int
    share_code: str
    title: str
    description: str
    url: str
    thumbnail_ref: str | None
    tech_stack: list[str]
    views: int
    total_reviews: int
    average_rating: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProjectDetail(ProjectPublic):
    """Project as shown to its owner, with the shareable link."""

    status: str
    owner_name: str | None
    share_link: str

    @model_validator(mode="before")
    @classmethod
    def _attach_share_link(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            data = extracted

        if not data.get("share_link") and data.get("share_code"):
            data["share_link"] = settings.share_link(str(data["share_code"]))
        return data


class OwnerDashboardResponse(BaseModel):
    """An owner's active projects and portfolio stats."""

    projects: list[ProjectDetail]
    total_projects: int
    total_reviews: int
    average_rating: float
