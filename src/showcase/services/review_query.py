"""Fetching and ordering a project's reviews."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from showcase.core.settings import settings
from showcase.db.time import as_utc
from showcase.models import REVIEW_STATUS_PUBLISHED, Review
from showcase.repositories.document_store import REVIEWS, DocumentStore, Filter, OrderBy
from showcase.services.errors import ValidationError


class ReviewSort(str, Enum):
    """Display orders for a review list."""

    RECENT = "recent"
    HIGHEST = "highest"
    LOWEST = "lowest"
    HELPFUL = "helpful"


def parse_sort_key(value: str | ReviewSort) -> ReviewSort:
    """Return the :class:`ReviewSort` named by ``value``."""
    try:
        return ReviewSort(value)
    except ValueError as err:
        allowed = ", ".join(key.value for key in ReviewSort)
        raise ValidationError({"sort": f"Sort must be one of: {allowed}"}) from err


def fetch_reviews(store: DocumentStore, project_id: int, limit: int | None = None) -> list[Review]:
    """Return the most recent published reviews of a project, newest first.

    The window is fixed: reviews older than the ``limit``-th most recent are
    never returned, whatever order the caller later applies.
    """
    window = limit if limit is not None else settings.review_fetch_limit
    return store.query(
        REVIEWS,
        filters=[
            Filter("project_id", "==", project_id),
            Filter("status", "==", REVIEW_STATUS_PUBLISHED),
        ],
        order_by=[OrderBy("created_at", "desc")],
        limit=window,
    )


def sort_reviews(reviews: Iterable[Review], sort_key: str | ReviewSort) -> list[Review]:
    """Return a re-ordered copy of ``reviews``.

    Sorting is stable, so reviews comparing equal keep their previous
    relative order. No storage access happens here.
    """
    key = parse_sort_key(sort_key)
    items = list(reviews)
    if key is ReviewSort.RECENT:
        return sorted(items, key=lambda review: as_utc(review.created_at), reverse=True)
    if key is ReviewSort.HIGHEST:
        return sorted(items, key=lambda review: review.rating, reverse=True)
    if key is ReviewSort.LOWEST:
        return sorted(items, key=lambda review: review.rating)
    return sorted(items, key=lambda review: review.helpful_count or 0, reverse=True)


def list_reviews(
    store: DocumentStore,
    project_id: int,
    sort_key: str | ReviewSort = ReviewSort.RECENT,
) -> list[Review]:
    """Fetch a project's review window and order it by ``sort_key``."""
    key = parse_sort_key(sort_key)
    return sort_reviews(fetch_reviews(store, project_id), key)
