"""Domain exceptions raised by Showcase services.

Endpoints translate these into HTTP responses; services never retry.
"""

from __future__ import annotations


class ShowcaseError(Exception):
    """Base exception for all Showcase domain failures."""


class ValidationError(ShowcaseError):
    """Raised when a submission is rejected before any storage call.

    Attributes:
        errors: Mapping of field name to a human-readable message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in self.errors.items()))


class DuplicateSubmissionBlocked(ShowcaseError):
    """Raised when the duplicate guard short-circuits a resubmission."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Client already submitted for {key}")


class StorageWriteFailure(ShowcaseError):
    """Raised when a review insert or aggregate update fails.

    ``review_persisted`` is True when the review row was written but the
    project aggregate was not; the aggregate then understates reality until a
    later submission builds on the stale base.
    """

    def __init__(self, message: str, *, review_persisted: bool = False) -> None:
        self.review_persisted = review_persisted
        super().__init__(message)


class NotFound(ShowcaseError):
    """Raised when a share code, project or review does not resolve."""


class PermissionDenied(ShowcaseError):
    """Raised when an owner acts on a project they do not own."""
