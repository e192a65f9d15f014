"""Tests for fetching and ordering reviews."""

from datetime import timedelta

import pytest

from showcase.db.time import utcnow
from showcase.services.errors import ValidationError
from showcase.services.review_query import (
    ReviewSort,
    fetch_reviews,
    list_reviews,
    parse_sort_key,
    sort_reviews,
)


@pytest.fixture()
def mixed_reviews(test_project, make_review):
    """Four reviews created one minute apart, oldest first."""
    base = utcnow() - timedelta(hours=1)
    ratings_and_votes = [(5, 2), (9, 0), (5, 7), (2, 2)]
    return [
        make_review(test_project, created_at=base + timedelta(minutes=i), rating=rating, helpful_count=helpful)
        for i, (rating, helpful) in enumerate(ratings_and_votes)
    ]


def test_parse_sort_key_rejects_unknown() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_sort_key("random")
    assert "sort" in excinfo.value.errors


def test_parse_sort_key_accepts_values() -> None:
    assert parse_sort_key("helpful") is ReviewSort.HELPFUL
    assert parse_sort_key(ReviewSort.LOWEST) is ReviewSort.LOWEST


def test_fetch_is_newest_first(store, test_project, mixed_reviews) -> None:
    fetched = fetch_reviews(store, test_project.id)
    assert [review.id for review in fetched] == [review.id for review in reversed(mixed_reviews)]


def test_fetch_skips_unpublished_and_other_projects(store, test_project, make_project, make_review) -> None:
    visible = make_review(test_project)
    make_review(test_project, status="hidden")
    make_review(make_project())

    fetched = fetch_reviews(store, test_project.id)
    assert [review.id for review in fetched] == [visible.id]


def test_fetch_window_keeps_most_recent(store, test_project, make_review) -> None:
    base = utcnow() - timedelta(days=1)
    created = [make_review(test_project, created_at=base + timedelta(minutes=i)) for i in range(55)]

    fetched = fetch_reviews(store, test_project.id)
    assert len(fetched) == 50
    assert {review.id for review in fetched} == {review.id for review in created[5:]}


def test_highest_and_lowest_are_stable(mixed_reviews) -> None:
    recent = sort_reviews(mixed_reviews, ReviewSort.RECENT)
    # Ids by creation: r0=(5,2), r1=(9,0), r2=(5,7), r3=(2,2)
    r0, r1, r2, r3 = mixed_reviews

    highest = sort_reviews(recent, "highest")
    assert [review.id for review in highest] == [r1.id, r2.id, r0.id, r3.id]

    lowest = sort_reviews(recent, "lowest")
    assert [review.id for review in lowest] == [r3.id, r2.id, r0.id, r1.id]


def test_helpful_sort_keeps_ties_in_input_order(mixed_reviews) -> None:
    r0, r1, r2, r3 = mixed_reviews
    helpful = sort_reviews(sort_reviews(mixed_reviews, "recent"), "helpful")
    assert [review.id for review in helpful] == [r2.id, r3.id, r0.id, r1.id]


def test_sorting_preserves_membership(mixed_reviews) -> None:
    for key in ReviewSort:
        ordered = sort_reviews(mixed_reviews, key)
        assert sorted(review.id for review in ordered) == sorted(review.id for review in mixed_reviews)


def test_recent_sort_is_idempotent(mixed_reviews) -> None:
    once = sort_reviews(mixed_reviews, "recent")
    twice = sort_reviews(once, "recent")
    assert [review.id for review in once] == [review.id for review in twice]


def test_list_reviews_applies_sort(store, test_project, mixed_reviews) -> None:
    listed = list_reviews(store, test_project.id, "lowest")
    assert [review.rating for review in listed] == [2, 5, 5, 9]


def test_list_reviews_rejects_bad_sort_before_fetch(store, test_project, mocker) -> None:
    query = mocker.spy(store, "query")
    with pytest.raises(ValidationError):
        list_reviews(store, test_project.id, "oldest")
    query.assert_not_called()
