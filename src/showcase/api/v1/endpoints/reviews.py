# src/showcase/api/v1/endpoints/reviews.py
"""Public, anonymous review endpoints reached through a share link."""

import logging

from fastapi import APIRouter, Query, status

from showcase.schemas.project import ProjectPublic
from showcase.schemas.review import (
    HelpfulResponse,
    ReviewCreate,
    ReviewPageResponse,
    ReviewResponse,
    ReviewSubmitResponse,
)
from showcase.services.errors import ShowcaseError, StorageWriteFailure
from showcase.services.project_service import get_project_by_share_code
from showcase.services.review_service import ReviewSubmission, validate_submission

from ..dependencies import FingerprintDep, ReviewServiceDep, http_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reviews"])

SORT_DESCRIPTION = "One of: recent, highest, lowest, helpful"


@router.get("/review/{share_code}", response_model=ReviewPageResponse)
async def get_review_page(
    share_code: str,
    service: ReviewServiceDep,
    sort: str = Query("recent", description=SORT_DESCRIPTION),
) -> ReviewPageResponse:
    """Load the public review page; counts one view of the project.

    Raises:
        HTTPException: 404 if the share code does not resolve
    """
    try:
        page = service.load_review_page(share_code, sort)
    except ShowcaseError as err:
        raise http_error(err) from err
    return ReviewPageResponse(
        project=ProjectPublic.model_validate(page.project),
        reviews=[ReviewResponse.model_validate(review) for review in page.reviews],
        sort=page.sort.value,
        already_reviewed=page.already_reviewed,
    )


@router.get("/review/{share_code}/reviews", response_model=list[ReviewResponse])
async def get_project_reviews(
    share_code: str,
    service: ReviewServiceDep,
    sort: str = Query("recent", description=SORT_DESCRIPTION),
) -> list[ReviewResponse]:
    """Return the project's review window in the requested order, without counting a view."""
    try:
        page = service.load_review_page(share_code, sort, count_view=False)
    except ShowcaseError as err:
        raise http_error(err) from err
    return [ReviewResponse.model_validate(review) for review in page.reviews]


@router.post(
    "/review/{share_code}/reviews",
    response_model=ReviewSubmitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_review(
    share_code: str,
    review_data: ReviewCreate,
    service: ReviewServiceDep,
    fingerprint: FingerprintDep,
) -> ReviewSubmitResponse:
    """Submit an anonymous review for the project behind ``share_code``.

    Raises:
        HTTPException: 422 on invalid input, 409 if this client already
            reviewed, 404 for unknown links, 503 if storage failed
    """
    submission = ReviewSubmission(
        rating=review_data.rating,
        text=review_data.text,
        agreed_to_terms=review_data.agreed_to_terms,
    )
    try:
        validate_submission(submission)
        project = get_project_by_share_code(service.store, share_code)
        published = service.submit_review(project.id, submission, fingerprint)
    except StorageWriteFailure as err:
        if err.review_persisted:
            logger.error("Review for %s stored without aggregate update", share_code)
        raise http_error(err) from err
    except ShowcaseError as err:
        raise http_error(err) from err
    return ReviewSubmitResponse(
        review_id=published.review_id,
        average_rating=published.average_rating,
        total_reviews=published.total_reviews,
    )


@router.post("/reviews/{review_id}/helpful", response_model=HelpfulResponse)
async def mark_helpful(review_id: int, service: ReviewServiceDep) -> HelpfulResponse:
    """Count this client's helpful vote; repeats leave the count unchanged."""
    try:
        vote = service.mark_helpful(review_id)
    except ShowcaseError as err:
        raise http_error(err) from err
    return HelpfulResponse(
        review_id=vote.review_id,
        helpful_count=vote.helpful_count,
        counted=vote.counted,
    )
