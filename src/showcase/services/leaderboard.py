"""Leaderboard ranking of active, reviewed projects."""

from __future__ import annotations

import calendar
from collections.abc import Sequence
from datetime import datetime, timedelta
from enum import Enum

from showcase.core.settings import settings
from showcase.db.time import as_utc, utcnow
from showcase.models import PROJECT_STATUS_ACTIVE, Project
from showcase.repositories.document_store import PROJECTS, DocumentStore, Filter, OrderBy
from showcase.services.errors import ValidationError


class TimeWindow(str, Enum):
    """Creation-date windows a leaderboard can be restricted to."""

    ALL = "all"
    WEEK = "week"
    MONTH = "month"


def parse_time_window(value: str | TimeWindow) -> TimeWindow:
    try:
        return TimeWindow(value)
    except ValueError as err:
        allowed = ", ".join(window.value for window in TimeWindow)
        raise ValidationError({"window": f"Window must be one of: {allowed}"}) from err


def _one_month_earlier(moment: datetime) -> datetime:
    # Same day of the previous month, clamped to that month's last day.
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def window_start(window: str | TimeWindow, now: datetime | None = None) -> datetime | None:
    """Return the earliest creation time admitted by ``window``.

    ``None`` means no lower bound.
    """
    key = parse_time_window(window)
    current = as_utc(now) if now is not None else utcnow()
    if key is TimeWindow.WEEK:
        return current - timedelta(days=7)
    if key is TimeWindow.MONTH:
        return _one_month_earlier(current)
    return None


def top_projects(
    store: DocumentStore,
    window: str | TimeWindow = TimeWindow.ALL,
    limit: int | None = None,
    *,
    now: datetime | None = None,
) -> list[Project]:
    """Return the highest rated active projects with at least one review.

    Projects are ordered by ``average_rating`` descending, then by
    ``total_reviews`` descending, so that at equal averages the better
    corroborated project ranks first.
    """
    size = limit if limit is not None else settings.leaderboard_default_limit
    if size < 1:
        raise ValidationError({"limit": "Limit must be at least 1"})

    filters = [
        Filter("status", "==", PROJECT_STATUS_ACTIVE),
        Filter("total_reviews", ">", 0),
    ]
    start = window_start(window, now)
    if start is not None:
        filters.append(Filter("created_at", ">=", start))

    return store.query(
        PROJECTS,
        filters=filters,
        order_by=[OrderBy("average_rating", "desc"), OrderBy("total_reviews", "desc")],
        limit=size,
    )


def split_podium(
    projects: Sequence[Project],
    size: int | None = None,
) -> tuple[list[Project], list[Project]]:
    """Split an ordered leaderboard into ``(podium, rest)`` for display.

    A podium is only formed when it can be filled; shorter boards are
    returned entirely as ``rest``.
    """
    podium_size = size if size is not None else settings.leaderboard_podium_size
    ranked = list(projects)
    if len(ranked) < podium_size:
        return [], ranked
    return ranked[:podium_size], ranked[podium_size:]
