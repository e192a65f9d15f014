"""Incremental maintenance of a project's rating aggregate."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from showcase.models import REVIEW_STATUS_PUBLISHED, Project
from showcase.repositories.document_store import (
    PROJECTS,
    REVIEWS,
    DocumentStore,
    StorageError,
)
from showcase.services.errors import StorageWriteFailure

logger = logging.getLogger(__name__)


def apply_new_rating(average: float, total: int, rating: int) -> tuple[float, int]:
    """Fold one rating into a running mean in O(1).

    Args:
        average: Current mean of ``total`` ratings (0 when ``total`` is 0).
        total: Number of ratings already folded in.
        rating: The new rating.

    Returns:
        ``(new_average, new_count)``.
    """
    new_count = total + 1
    new_average = (average * total + rating) / new_count
    return new_average, new_count


@dataclass(frozen=True)
class PublishedReview:
    """Outcome of a successful publication."""

    review_id: int
    average_rating: float
    total_reviews: int


class RatingAggregator:
    """Persists a review and the project aggregate derived from it.

    The two writes are ordered: the review is inserted first and the
    aggregate is only written if the insert succeeded. They are not atomic.
    The aggregate is a read-modify-write of the ``project`` snapshot handed
    in, so two concurrent publications against the same project can lose one
    aggregate update even though both reviews are stored.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def publish_review(
        self,
        project: Project,
        *,
        rating: int,
        text: str,
        fingerprint_hash: str,
    ) -> PublishedReview:
        """Insert a review and update ``project``'s aggregate.

        Raises:
            StorageWriteFailure: If either write fails. ``review_persisted``
                tells the caller whether the review row exists.
        """
        try:
            review_id = self.store.insert(
                REVIEWS,
                {
                    "project_id": project.id,
                    "rating": rating,
                    "text": text,
                    "fingerprint_hash": fingerprint_hash,
                    "helpful_count": 0,
                    "flag_count": 0,
                    "status": REVIEW_STATUS_PUBLISHED,
                },
            )
        except StorageError as err:
            raise StorageWriteFailure("Failed to submit review") from err

        stored_total = project.total_reviews or 0
        new_average, new_count = apply_new_rating(project.average_rating or 0.0, stored_total, rating)
        try:
            self.store.update(
                PROJECTS,
                project.id,
                {"average_rating": new_average, "total_reviews": new_count},
            )
        except StorageError as err:
            logger.warning(
                "Review %s stored but aggregate update for project %s failed; "
                "aggregate still counts %d of %d published reviews",
                review_id,
                project.id,
                stored_total,
                new_count,
            )
            raise StorageWriteFailure(
                "Failed to update project rating",
                review_persisted=True,
            ) from err

        logger.info(
            "Published review %s for project %s (average %.3f over %d)",
            review_id,
            project.id,
            new_average,
            new_count,
        )
        return PublishedReview(
            review_id=review_id,
            average_rating=new_average,
            total_reviews=new_count,
        )
