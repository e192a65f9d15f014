"""Review submission and helpful-vote flows for anonymous visitors."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from showcase.core.settings import settings
from showcase.models import Project, Review
from showcase.repositories.document_store import (
    PROJECTS,
    REVIEWS,
    DocumentStore,
    StorageError,
)
from showcase.services.aggregator import PublishedReview, RatingAggregator
from showcase.services.duplicate_guard import DuplicateGuard
from showcase.services.errors import (
    DuplicateSubmissionBlocked,
    NotFound,
    StorageWriteFailure,
    ValidationError,
)
from showcase.services.project_service import get_project_by_share_code, record_view
from showcase.services.review_query import ReviewSort, list_reviews, parse_sort_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewSubmission:
    """What a visitor submits from the review form."""

    rating: int
    text: str
    agreed_to_terms: bool


def validate_submission(submission: ReviewSubmission) -> str:
    """Check a submission and return the trimmed review text.

    The minimum length applies to the trimmed text, the maximum to the text
    as typed.

    Raises:
        ValidationError: With one message per offending field.
    """
    errors: dict[str, str] = {}

    rating = submission.rating
    if isinstance(rating, bool) or not isinstance(rating, int):
        errors["rating"] = "Rating must be a whole number"
    elif not settings.rating_min <= rating <= settings.rating_max:
        errors["rating"] = (
            f"Rating must be between {settings.rating_min} and {settings.rating_max}"
        )

    text = submission.text or ""
    if len(text.strip()) < settings.review_text_min_length:
        errors["text"] = (
            f"Review must be at least {settings.review_text_min_length} characters"
        )
    elif len(text) > settings.review_text_max_length:
        errors["text"] = (
            f"Review must be {settings.review_text_max_length} characters or less"
        )

    if not submission.agreed_to_terms:
        errors["agreed_to_terms"] = "You must agree to the anonymous review policy"

    if errors:
        raise ValidationError(errors)
    return text.strip()


@dataclass(frozen=True)
class HelpfulVote:
    """Result of a mark-helpful attempt; ``counted`` is False for repeats."""

    review_id: int
    helpful_count: int
    counted: bool


@dataclass
class ReviewPage:
    """Everything the public review page needs for one client."""

    project: Project
    reviews: list[Review]
    sort: ReviewSort
    already_reviewed: bool


class ReviewService:
    """Runs visitor actions for one client context."""

    def __init__(self, store: DocumentStore, guard: DuplicateGuard) -> None:
        self.store = store
        self.guard = guard

    def load_review_page(
        self,
        share_code: str,
        sort_key: str | ReviewSort = ReviewSort.RECENT,
        *,
        count_view: bool = True,
    ) -> ReviewPage:
        """Resolve a share link and assemble the review page.

        Loading the page counts one view unless ``count_view`` is False.
        """
        sort = parse_sort_key(sort_key)
        project = get_project_by_share_code(self.store, share_code)
        if count_view:
            try:
                record_view(self.store, project)
            except StorageError as err:
                logger.warning("Could not count view of project %s: %s", project.id, err)
        return ReviewPage(
            project=project,
            reviews=list_reviews(self.store, project.id, sort),
            sort=sort,
            already_reviewed=self.guard.has_reviewed(project.id),
        )

    def submit_review(
        self,
        project_id: int,
        submission: ReviewSubmission,
        fingerprint_hash: str,
    ) -> PublishedReview:
        """Validate, guard and publish a review.

        Raises:
            ValidationError: Before any storage call.
            DuplicateSubmissionBlocked: If this client already reviewed.
            NotFound: If the project does not exist.
            StorageWriteFailure: If persisting failed; see ``review_persisted``.
        """
        text = validate_submission(submission)
        if self.guard.has_reviewed(project_id):
            logger.debug("Client %s already reviewed project %s", self.guard.client_id, project_id)
            raise DuplicateSubmissionBlocked(f"project:{project_id}")

        project = self.store.get(PROJECTS, project_id)
        if project is None:
            raise NotFound(f"Project {project_id} not found")

        published = RatingAggregator(self.store).publish_review(
            project,
            rating=submission.rating,
            text=text,
            fingerprint_hash=fingerprint_hash,
        )
        self.guard.record_reviewed(project_id)
        return published

    def mark_helpful(self, review_id: int) -> HelpfulVote:
        """Count one helpful vote per client for ``review_id``.

        A repeat from the same client is a no-op that reports the current
        count.
        """
        review = self.store.get(REVIEWS, review_id)
        if review is None:
            raise NotFound(f"Review {review_id} not found")

        if self.guard.has_marked_helpful(review_id):
            logger.debug("Client %s already marked review %s helpful", self.guard.client_id, review_id)
            return HelpfulVote(review_id=review_id, helpful_count=review.helpful_count, counted=False)

        try:
            self.store.atomic_increment(REVIEWS, review_id, "helpful_count", 1)
        except StorageError as err:
            raise StorageWriteFailure("Failed to record helpful vote") from err
        self.guard.record_helpful(review_id)

        refreshed = self.store.get(REVIEWS, review_id)
        count = refreshed.helpful_count if refreshed is not None else review.helpful_count + 1
        logger.info("Review %s marked helpful (now %d)", review_id, count)
        return HelpfulVote(review_id=review_id, helpful_count=count, counted=True)
