# src/showcase/services/__init__.py
"""Business logic services for the Showcase application."""

from .aggregator import PublishedReview, RatingAggregator, apply_new_rating
from .duplicate_guard import DuplicateGuard, MemoryClientStore, RedisClientStore
from .fingerprint import fingerprint_from_headers, fingerprint_hash
from .leaderboard import TimeWindow, split_podium, top_projects
from .review_query import ReviewSort, list_reviews, sort_reviews
from .review_service import ReviewService, ReviewSubmission

__all__ = [
    "DuplicateGuard",
    "MemoryClientStore",
    "PublishedReview",
    "RatingAggregator",
    "RedisClientStore",
    "ReviewService",
    "ReviewSort",
    "ReviewSubmission",
    "TimeWindow",
    "apply_new_rating",
    "fingerprint_from_headers",
    "fingerprint_hash",
    "list_reviews",
    "sort_reviews",
    "split_podium",
    "top_projects",
]
