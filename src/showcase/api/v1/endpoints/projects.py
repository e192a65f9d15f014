# src/showcase/api/v1/endpoints/projects.py
"""Owner-facing project endpoints."""

from fastapi import APIRouter, status

from showcase.schemas.project import OwnerDashboardResponse, ProjectCreate, ProjectDetail
from showcase.services.errors import NotFound, ShowcaseError
from showcase.services.project_service import (
    ProjectDraft,
    archive_project,
    create_project,
    get_project_by_share_code,
    owner_dashboard,
)

from ..dependencies import CurrentOwnerDep, StoreDep, http_error

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/", response_model=ProjectDetail, status_code=status.HTTP_201_CREATED)
async def submit_project(
    project_data: ProjectCreate,
    owner_id: CurrentOwnerDep,
    store: StoreDep,
) -> ProjectDetail:
    """Publish a project and return it with its shareable link.

    Raises:
        HTTPException: 422 on invalid fields, 503 if the write failed
    """
    draft = ProjectDraft(
        title=project_data.title,
        url=project_data.url,
        description=project_data.description,
        tech_stack=project_data.tech_stack,
        thumbnail_ref=project_data.thumbnail_ref,
    )
    try:
        project = create_project(
            store,
            owner_id=owner_id,
            draft=draft,
            owner_name=project_data.owner_name,
        )
    except ShowcaseError as err:
        raise http_error(err) from err
    return ProjectDetail.model_validate(project)


@router.get("/mine", response_model=OwnerDashboardResponse)
async def list_my_projects(owner_id: CurrentOwnerDep, store: StoreDep) -> OwnerDashboardResponse:
    """Return the caller's active projects, newest first, with review stats."""
    dashboard = owner_dashboard(store, owner_id)
    return OwnerDashboardResponse(
        projects=[ProjectDetail.model_validate(project) for project in dashboard.projects],
        total_projects=dashboard.total_projects,
        total_reviews=dashboard.total_reviews,
        average_rating=dashboard.average_rating,
    )


@router.get("/share/{share_code}", response_model=ProjectDetail)
async def get_share_page(
    share_code: str,
    owner_id: CurrentOwnerDep,
    store: StoreDep,
) -> ProjectDetail:
    """Return one of the caller's projects by share code, without counting a view."""
    try:
        project = get_project_by_share_code(store, share_code)
    except ShowcaseError as err:
        raise http_error(err) from err
    if project.owner_id != owner_id:
        # Do not reveal other owners' projects on the share page.
        raise http_error(NotFound(f"No project for share code {share_code!r}"))
    return ProjectDetail.model_validate(project)


@router.post("/{project_id}/archive", response_model=ProjectDetail)
async def archive(project_id: int, owner_id: CurrentOwnerDep, store: StoreDep) -> ProjectDetail:
    """Archive one of the caller's projects. There is no way back."""
    try:
        project = archive_project(store, owner_id, project_id)
    except ShowcaseError as err:
        raise http_error(err) from err
    return ProjectDetail.model_validate(project)
