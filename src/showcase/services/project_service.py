"""Project publication, lookup and owner-side management."""

from __future__ import annotations

import logging
import secrets
import string
from collections.abc import Sequence
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from showcase.core.settings import settings
from showcase.models import PROJECT_STATUS_ACTIVE, PROJECT_STATUS_ARCHIVED, Project
from showcase.repositories.document_store import (
    PROJECTS,
    DocumentStore,
    Filter,
    OrderBy,
    StorageError,
)
from showcase.services.errors import (
    NotFound,
    PermissionDenied,
    StorageWriteFailure,
    ValidationError,
)

logger = logging.getLogger(__name__)

# URL-safe alphabet used for share codes.
SHARE_CODE_ALPHABET = string.ascii_letters + string.digits + "_-"
_SHARE_CODE_ATTEMPTS = 5


def generate_share_code(length: int | None = None) -> str:
    """Return a random URL-safe share code."""
    size = length if length is not None else settings.share_code_length
    return "".join(secrets.choice(SHARE_CODE_ALPHABET) for _ in range(size))


@dataclass(frozen=True)
class ProjectDraft:
    """Owner-supplied fields of a new project."""

    title: str
    url: str
    description: str
    tech_stack: Sequence[str] = ()
    thumbnail_ref: str | None = None


def _normalize_tech_stack(tags: Sequence[str]) -> list[str]:
    seen: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


def validate_project(draft: ProjectDraft) -> ProjectDraft:
    """Return a trimmed copy of ``draft`` or raise ``ValidationError``."""
    errors: dict[str, str] = {}

    title = draft.title.strip()
    if not title:
        errors["title"] = "Project title is required"
    elif len(title) > settings.project_title_max_length:
        errors["title"] = (
            f"Title must be {settings.project_title_max_length} characters or less"
        )

    url = draft.url.strip()
    if not url:
        errors["url"] = "Project URL is required"
    else:
        parts = urlsplit(url)
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            errors["url"] = "Please enter a valid URL"

    description = draft.description.strip()
    if not description:
        errors["description"] = "Description is required"
    elif len(description) > settings.project_description_max_length:
        errors["description"] = (
            f"Description must be {settings.project_description_max_length} characters or less"
        )

    tech_stack = _normalize_tech_stack(draft.tech_stack)
    if len(tech_stack) > settings.project_tech_stack_max:
        errors["tech_stack"] = (
            f"Select at most {settings.project_tech_stack_max} technologies"
        )

    if errors:
        raise ValidationError(errors)

    thumbnail = draft.thumbnail_ref.strip() if draft.thumbnail_ref else None
    return ProjectDraft(
        title=title,
        url=url,
        description=description,
        tech_stack=tech_stack,
        thumbnail_ref=thumbnail or None,
    )


def _unused_share_code(store: DocumentStore) -> str:
    for _ in range(_SHARE_CODE_ATTEMPTS):
        code = generate_share_code()
        if not store.query(PROJECTS, filters=[Filter("share_code", "==", code)], limit=1):
            return code
    raise StorageWriteFailure("Could not allocate a unique share code")


def create_project(
    store: DocumentStore,
    *,
    owner_id: str,
    draft: ProjectDraft,
    owner_name: str | None = None,
) -> Project:
    """Validate and publish a new project for ``owner_id``."""
    clean = validate_project(draft)
    share_code = _unused_share_code(store)
    try:
        project_id = store.insert(
            PROJECTS,
            {
                "share_code": share_code,
                "title": clean.title,
                "url": clean.url,
                "description": clean.description,
                "tech_stack": list(clean.tech_stack),
                "thumbnail_ref": clean.thumbnail_ref,
                "owner_id": owner_id,
                "owner_name": owner_name,
                "status": PROJECT_STATUS_ACTIVE,
                "views": 0,
                "total_reviews": 0,
                "average_rating": 0.0,
            },
        )
    except StorageError as err:
        raise StorageWriteFailure("Failed to submit project") from err

    logger.info("Owner %s published project %s (%s)", owner_id, project_id, share_code)
    project = store.get(PROJECTS, project_id)
    if project is None:
        raise StorageWriteFailure("Project vanished after insert")
    return project


def get_project_by_share_code(store: DocumentStore, share_code: str) -> Project:
    """Resolve a public share code to its project.

    Raises:
        NotFound: If no project carries ``share_code``.
    """
    matches = store.query(PROJECTS, filters=[Filter("share_code", "==", share_code)], limit=1)
    if not matches:
        raise NotFound(f"No project for share code {share_code!r}")
    return matches[0]


def get_owned_project(store: DocumentStore, owner_id: str, project_id: int) -> Project:
    project = store.get(PROJECTS, project_id)
    if project is None:
        raise NotFound(f"Project {project_id} not found")
    if project.owner_id != owner_id:
        raise PermissionDenied("Project belongs to another owner")
    return project


def record_view(store: DocumentStore, project: Project) -> None:
    """Count one page load of ``project``."""
    store.atomic_increment(PROJECTS, project.id, "views", 1)


def archive_project(store: DocumentStore, owner_id: str, project_id: int) -> Project:
    """Move an owner's project to ``archived``. Archiving is one-way."""
    project = get_owned_project(store, owner_id, project_id)
    if project.status == PROJECT_STATUS_ARCHIVED:
        return project
    try:
        store.update(PROJECTS, project.id, {"status": PROJECT_STATUS_ARCHIVED})
    except StorageError as err:
        raise StorageWriteFailure("Failed to archive project") from err
    logger.info("Owner %s archived project %s", owner_id, project_id)
    return store.get(PROJECTS, project_id)


@dataclass
class OwnerDashboard:
    """An owner's active projects with portfolio-wide review stats."""

    projects: list[Project] = field(default_factory=list)
    total_projects: int = 0
    total_reviews: int = 0
    average_rating: float = 0.0


def owner_dashboard(store: DocumentStore, owner_id: str) -> OwnerDashboard:
    """Return the owner's active projects, newest first, with stats.

    ``average_rating`` weights each project's mean by its review count.
    """
    projects = store.query(
        PROJECTS,
        filters=[
            Filter("owner_id", "==", owner_id),
            Filter("status", "==", PROJECT_STATUS_ACTIVE),
        ],
        order_by=[OrderBy("created_at", "desc")],
    )
    total_reviews = sum(project.total_reviews or 0 for project in projects)
    weighted = sum(
        (project.average_rating or 0.0) * (project.total_reviews or 0) for project in projects
    )
    return OwnerDashboard(
        projects=projects,
        total_projects=len(projects),
        total_reviews=total_reviews,
        average_rating=weighted / total_reviews if total_reviews > 0 else 0.0,
    )
