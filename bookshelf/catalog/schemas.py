"""
Pydantic schema definitions for the catalog module.

Field names on the wire are camelCase (``pageCount``, ``readPage``,
``insertedAt``) while the Python attributes are snake_case; every model
accepts either spelling on input and ``model_dump(by_alias=True)``
produces the wire form. ``BookPayload`` is what clients send on create
and update, ``Book`` is the stored record and ``BookSummary`` is the
reduced projection returned by the list endpoint.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookPayload(_CamelModel):
    """Client-supplied values for a book.

    Every field is optional here. A missing ``name`` is a catalogue
    rule rather than a schema rule, so that it is reported with the
    catalogue's own message instead of a generic validation error.
    ``year``, ``author``, ``summary`` and ``publisher`` are free-form and
    stored exactly as sent.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    name: Optional[str] = None
    year: Any = None
    author: Any = None
    summary: Any = None
    publisher: Any = None
    page_count: Optional[int] = None
    read_page: Optional[int] = None
    reading: Optional[bool] = None


class Book(BookPayload):
    """A stored book record.

    ``id``, ``finished`` and both timestamps are assigned by the store;
    ``finished`` mirrors ``readPage == pageCount`` as of the last write.
    """

    id: str
    finished: bool
    inserted_at: str
    updated_at: str


class BookSummary(_CamelModel):
    """Projection of a book used by ``GET /books``."""

    id: str
    name: Optional[str] = None
    publisher: Any = None
