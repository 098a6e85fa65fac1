"""
In-memory data store for the catalogue API.

The ``Catalog`` class owns the collection of ``Book`` records for the
lifetime of the process. Records are kept in a dict keyed by id, which
preserves insertion order for listing and gives direct lookups for the
by-id operations. Nothing is persisted; a restart starts from an empty
catalogue.

Operations never raise for expected outcomes. A missing name, an
impossible reading progress or an unknown id is reported through the
``error`` of the returned ``Outcome`` so that the router can translate it
into a ``fail`` envelope. Only genuinely unexpected faults propagate.
"""

from __future__ import annotations

import logging
import re
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set

from .schemas import Book, BookPayload, BookSummary


logger = logging.getLogger(__name__)

# Numeric text accepted by coerce_flag; anything else is not a number.
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_RADIX = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY = re.compile(r"[+-]?Infinity")


class CatalogError(str, Enum):
    """Reasons a catalogue operation can be refused."""

    MISSING_NAME = "missing_name"
    PAGE_COUNT_EXCEEDED = "page_count_exceeded"
    NOT_FOUND = "not_found"
    INSERTION_FAILED = "insertion_failed"


@dataclass
class Outcome:
    """Result of a catalogue operation: a value on success, an error otherwise."""

    value: Any = None
    error: Optional[CatalogError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(moment: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _norm(s: Optional[str]) -> str:
    return (s or "").lower()


def coerce_flag(raw: Optional[str]) -> bool:
    """Normalize a query-string flag using numeric truthiness.

    The value is read as a number and is true when that number is
    non-zero. Surrounding whitespace is ignored and an empty string counts
    as zero. Integer literals with a ``0x``, ``0o`` or ``0b`` prefix are
    accepted, as are ``Infinity`` and ``-Infinity``. Digits must be ASCII.
    Text that is not a number at all (``"true"``, ``"yes"``, ``"inf"``) is
    false.

    Parameters
    ----------
    raw : Optional[str]
        The raw query parameter value.

    Returns
    -------
    bool
        The normalized flag.
    """
    text = (raw or "").strip()
    if not text:
        return False
    if _RADIX.fullmatch(text):
        return int(text, 0) != 0
    if _INFINITY.fullmatch(text):
        return True
    if _DECIMAL.fullmatch(text):
        return float(text) != 0
    return False


def _validate(payload: BookPayload) -> Optional[CatalogError]:
    # an explicit null name is stored, only an absent one is refused
    if "name" not in payload.model_fields_set:
        return CatalogError.MISSING_NAME
    if (
        payload.page_count is not None
        and payload.read_page is not None
        and payload.read_page > payload.page_count
    ):
        return CatalogError.PAGE_COUNT_EXCEEDED
    return None


class Catalog:
    """The process-wide collection of book records.

    A single lock guards the whole collection; every public operation
    holds it for its full duration, so operations are atomic with respect
    to each other even when FastAPI runs handlers on its threadpool.

    Parameters
    ----------
    clock : Callable[[], datetime], optional
        Source of the current time, used for ``insertedAt`` and
        ``updatedAt``. Defaults to the system clock in UTC.
    id_factory : Callable[[], str], optional
        Source of candidate ids. Candidates already issued by this
        catalogue are discarded, so ids are never reused after deletion.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._clock = clock or _utc_now
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex[:16])
        self._books: Dict[str, Book] = {}
        self._issued: Set[str] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)

    def _next_id(self) -> str:
        book_id = self._id_factory()
        while book_id in self._issued:
            book_id = self._id_factory()
        self._issued.add(book_id)
        return book_id

    def create(self, payload: BookPayload) -> Outcome:
        """Add a new book.

        Parameters
        ----------
        payload : BookPayload
            Candidate field values. ``id``, timestamps and ``finished``
            are assigned by the store.

        Returns
        -------
        Outcome
            The new id on success. ``MISSING_NAME`` or
            ``PAGE_COUNT_EXCEEDED`` when the payload is rejected, and
            ``INSERTION_FAILED`` when the stored record cannot be read
            back.
        """
        error = _validate(payload)
        if error is not None:
            logger.info("Rejected new book: %s", error.value)
            return Outcome(error=error)

        with self._lock:
            book_id = self._next_id()
            stamp = _iso(self._clock())
            book = Book(
                id=book_id,
                finished=payload.page_count == payload.read_page,
                inserted_at=stamp,
                updated_at=stamp,
                **payload.model_dump(),
            )
            self._books[book_id] = book
            stored = self._books.get(book_id)

        if stored is None:
            logger.error("Book %s was not retrievable after insertion", book_id)
            return Outcome(error=CatalogError.INSERTION_FAILED)
        logger.info("Added book %s (%r)", book_id, book.name)
        return Outcome(value=book_id)

    def list(
        self,
        name: Optional[str] = None,
        reading: Optional[str] = None,
        finished: Optional[str] = None,
    ) -> List[BookSummary]:
        """Return summaries of the books matching every given filter.

        ``name`` matches as a case-insensitive substring. ``reading`` and
        ``finished`` are raw flag values normalized by ``coerce_flag``.
        Filters left as ``None`` are ignored. Results keep insertion order.
        """
        nname = _norm(name) if name is not None else None
        want_reading = coerce_flag(reading) if reading is not None else None
        want_finished = coerce_flag(finished) if finished is not None else None

        with self._lock:
            items = list(self._books.values())

        if nname is not None:
            items = [b for b in items if nname in _norm(b.name)]
        if want_reading is not None:
            items = [b for b in items if b.reading is want_reading]
        if want_finished is not None:
            items = [b for b in items if b.finished is want_finished]

        return [BookSummary(id=b.id, name=b.name, publisher=b.publisher) for b in items]

    def get_by_id(self, book_id: str) -> Outcome:
        with self._lock:
            book = self._books.get(book_id)
        if book is None:
            return Outcome(error=CatalogError.NOT_FOUND)
        return Outcome(value=book.model_copy())

    def update_by_id(self, book_id: str, payload: BookPayload) -> Outcome:
        """Replace every mutable field of an existing book.

        Existence is checked before validation. Fields missing from the
        payload are stored as ``None``; nothing is merged from the
        previous version. ``id`` and ``insertedAt`` are kept and
        ``updatedAt`` is refreshed.
        """
        with self._lock:
            current = self._books.get(book_id)
            if current is None:
                logger.info("Update of unknown book %s", book_id)
                return Outcome(error=CatalogError.NOT_FOUND)

            error = _validate(payload)
            if error is not None:
                logger.info("Rejected update of book %s: %s", book_id, error.value)
                return Outcome(error=error)

            self._books[book_id] = Book(
                id=current.id,
                finished=payload.page_count == payload.read_page,
                inserted_at=current.inserted_at,
                updated_at=_iso(self._clock()),
                **payload.model_dump(),
            )

        logger.info("Updated book %s", book_id)
        return Outcome()

    def delete_by_id(self, book_id: str) -> Outcome:
        with self._lock:
            removed = self._books.pop(book_id, None)
        if removed is None:
            logger.info("Delete of unknown book %s", book_id)
            return Outcome(error=CatalogError.NOT_FOUND)
        logger.info("Deleted book %s", book_id)
        return Outcome()

    def clear(self) -> None:
        """Drop every record. Ids already issued stay reserved."""
        with self._lock:
            self._books.clear()
