"""Shared API dependencies for owners, anonymous clients and storage."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from showcase.core.security import InvalidTokenError, decode_owner_token
from showcase.db.session import get_db
from showcase.repositories.document_store import DocumentStore, SqlDocumentStore
from showcase.services.duplicate_guard import ClientStore, DuplicateGuard, get_client_store
from showcase.services.errors import (
    DuplicateSubmissionBlocked,
    NotFound,
    PermissionDenied,
    ShowcaseError,
    StorageWriteFailure,
    ValidationError,
)
from showcase.services.fingerprint import fingerprint_from_headers
from showcase.services.review_service import ReviewService

# HTTP Bearer scheme for owner tokens
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_document_store(db: SessionDep) -> DocumentStore:
    """Return the document store bound to the request's session."""
    return SqlDocumentStore(db)


StoreDep = Annotated[DocumentStore, Depends(get_document_store)]


def get_current_owner(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> str:
    """Return the owner identity carried in the bearer token.

    Raises:
        HTTPException: If the token is invalid or expired
    """
    try:
        return decode_owner_token(credentials.credentials)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


CurrentOwnerDep = Annotated[str, Depends(get_current_owner)]


def get_fingerprint(request: Request) -> str:
    """Return the weak fingerprint of the calling browser."""
    return fingerprint_from_headers(request.headers)


FingerprintDep = Annotated[str, Depends(get_fingerprint)]


def get_client_store_dep() -> ClientStore:
    """Return the shared client marker store."""
    return get_client_store()


ClientStoreDep = Annotated[ClientStore, Depends(get_client_store_dep)]


def get_duplicate_guard(
    store: ClientStoreDep,
    fingerprint: FingerprintDep,
    client_id: Annotated[str | None, Header(alias="X-Client-Id")] = None,
) -> DuplicateGuard:
    """Return the duplicate guard for the calling client context.

    Browsers send a locally persisted ``X-Client-Id``; without one the
    fingerprint stands in as the client context.
    """
    context = client_id.strip() if client_id and client_id.strip() else fingerprint
    return DuplicateGuard(store, context)


GuardDep = Annotated[DuplicateGuard, Depends(get_duplicate_guard)]


def get_review_service(store: StoreDep, guard: GuardDep) -> ReviewService:
    return ReviewService(store, guard)


ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]


def http_error(exc: ShowcaseError) -> HTTPException:
    """Translate a domain error into the HTTP error surfaced to clients."""
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=exc.errors)
    if isinstance(exc, DuplicateSubmissionBlocked):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="You've already reviewed this project",
        )
    if isinstance(exc, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, PermissionDenied):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, StorageWriteFailure):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to save your submission. Please try again.",
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unexpected error")
