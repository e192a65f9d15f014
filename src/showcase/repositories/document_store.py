"""Document-store contract and its SQLAlchemy implementation.

The review engine talks to storage only through :class:`DocumentStore`:
``insert`` with a server-assigned ``created_at``, ``atomic_increment`` for
counters, ``query`` with ANDed predicates and ordering, and a non-atomic
``update`` merge write. Every write is committed on its own; there is no
multi-document transaction.
"""
from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from showcase.db.session import Base
from showcase.db.time import utcnow
from showcase.models import Project, Review

__all__ = [
    "DocumentNotFoundError",
    "DocumentStore",
    "Filter",
    "OrderBy",
    "SqlDocumentStore",
    "StorageError",
]

logger = logging.getLogger(__name__)

PROJECTS = "projects"
REVIEWS = "reviews"

_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class StorageError(RuntimeError):
    """Raised when the backing store rejects or fails a read or write."""


class DocumentNotFoundError(StorageError):
    """Raised when a write targets a document that does not exist."""


@dataclass(frozen=True)
class Filter:
    """A single predicate; a query ANDs all of its filters together."""

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in _OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op!r}")


@dataclass(frozen=True)
class OrderBy:
    """One ordering key of a query."""

    field: str
    direction: Literal["asc", "desc"] = "asc"


class DocumentStore(Protocol):
    """Storage operations the review engine depends on."""

    def insert(self, collection: str, document: Mapping[str, Any]) -> int: ...

    def get(self, collection: str, doc_id: int) -> Any | None: ...

    def atomic_increment(self, collection: str, doc_id: int, field: str, delta: int = 1) -> None: ...

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Any]: ...

    def update(self, collection: str, doc_id: int, fields: Mapping[str, Any]) -> None: ...


class SqlDocumentStore:
    """DocumentStore backed by a SQLAlchemy session.

    Documents are the ORM instances of the mapped collection.
    """

    collections: dict[str, type[Base]] = {
        PROJECTS: Project,
        REVIEWS: Review,
    }

    def __init__(self, session: Session) -> None:
        """Initialize the store with a SQLAlchemy session."""
        self.session = session

    def _model(self, collection: str) -> type[Base]:
        try:
            return self.collections[collection]
        except KeyError as err:
            raise ValueError(f"Unknown collection: {collection!r}") from err

    @staticmethod
    def _column(model: type[Base], field: str) -> Any:
        if field not in model.__table__.c:
            raise ValueError(f"Unknown field {field!r} for {model.__tablename__}")
        return getattr(model, field)

    def _commit(self, action: str, collection: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as err:
            self.session.rollback()
            logger.error("Storage %s on %s failed: %s", action, collection, err)
            raise StorageError(f"{action} on {collection} failed") from err

    def insert(self, collection: str, document: Mapping[str, Any]) -> int:
        """Insert ``document`` and return its system-assigned id.

        ``created_at`` is always assigned here, never taken from the caller.
        """
        model = self._model(collection)
        values = {key: value for key, value in document.items() if key not in {"id", "created_at"}}
        for key in values:
            self._column(model, key)
        instance = model(**values, created_at=utcnow())
        try:
            self.session.add(instance)
            self.session.flush()
        except SQLAlchemyError as err:
            self.session.rollback()
            logger.error("Storage insert on %s failed: %s", collection, err)
            raise StorageError(f"insert on {collection} failed") from err
        new_id = instance.id
        self._commit("insert", collection)
        return new_id

    def get(self, collection: str, doc_id: int) -> Any | None:
        """Return the document with ``doc_id`` or ``None``."""
        model = self._model(collection)
        try:
            return self.session.get(model, doc_id)
        except SQLAlchemyError as err:
            raise StorageError(f"get on {collection} failed") from err

    def atomic_increment(self, collection: str, doc_id: int, field: str, delta: int = 1) -> None:
        """Add ``delta`` to a counter in a single UPDATE statement."""
        model = self._model(collection)
        column = self._column(model, field)
        try:
            result = self.session.execute(
                update(model)
                .where(model.id == doc_id)
                .values({field: column + delta})
                .execution_options(synchronize_session="fetch")
            )
        except SQLAlchemyError as err:
            self.session.rollback()
            logger.error("Storage increment of %s.%s failed: %s", collection, field, err)
            raise StorageError(f"increment on {collection} failed") from err
        if result.rowcount == 0:
            self.session.rollback()
            raise DocumentNotFoundError(f"{collection}/{doc_id} not found")
        self._commit("increment", collection)

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Any]:
        """Return documents matching every filter, ordered and truncated."""
        model = self._model(collection)
        stmt = select(model)
        for flt in filters:
            stmt = stmt.where(_OPERATORS[flt.op](self._column(model, flt.field), flt.value))
        for key in order_by:
            column = self._column(model, key.field)
            stmt = stmt.order_by(column.desc() if key.direction == "desc" else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            return list(self.session.execute(stmt).scalars())
        except SQLAlchemyError as err:
            raise StorageError(f"query on {collection} failed") from err

    def update(self, collection: str, doc_id: int, fields: Mapping[str, Any]) -> None:
        """Merge ``fields`` into the document; last writer wins."""
        model = self._model(collection)
        for key in fields:
            self._column(model, key)
        try:
            result = self.session.execute(
                update(model)
                .where(model.id == doc_id)
                .values(dict(fields))
                .execution_options(synchronize_session="fetch")
            )
        except SQLAlchemyError as err:
            self.session.rollback()
            logger.error("Storage update on %s failed: %s", collection, err)
            raise StorageError(f"update on {collection} failed") from err
        if result.rowcount == 0:
            self.session.rollback()
            raise DocumentNotFoundError(f"{collection}/{doc_id} not found")
        self._commit("update", collection)
