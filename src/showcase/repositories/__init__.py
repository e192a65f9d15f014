"""Storage access for the Showcase application."""

from .document_store import (
    DocumentNotFoundError,
    DocumentStore,
    Filter,
    OrderBy,
    SqlDocumentStore,
    StorageError,
)

__all__ = [
    "DocumentNotFoundError",
    "DocumentStore",
    "Filter",
    "OrderBy",
    "SqlDocumentStore",
    "StorageError",
]
