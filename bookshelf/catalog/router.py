"""
Route definitions for the catalogue API.

Endpoints:
- POST   /books            : add a book
- GET    /books            : list book summaries, filtered by name/reading/finished
- GET    /books/{book_id}  : get one book
- PUT    /books/{book_id}  : replace a book's fields
- DELETE /books/{book_id}  : remove a book

Every response body is an envelope ``{status, message?, data?}``.
Expected refusals from the ``Catalog`` become ``fail`` envelopes here;
unexpected exceptions are left to the application's fault middleware.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .schemas import BookPayload
from .store import Catalog, CatalogError


router = APIRouter(tags=["catalog"])

# Messages keyed by operation and refusal reason.
ADD_MESSAGES = {
    None: "Buku berhasil ditambahkan",
    CatalogError.MISSING_NAME: "Gagal menambahkan buku. Mohon isi nama buku",
    CatalogError.PAGE_COUNT_EXCEEDED: (
        "Gagal menambahkan buku. readPage tidak boleh lebih besar dari pageCount"
    ),
    CatalogError.INSERTION_FAILED: "Buku gagal ditambahkan",
}
GET_MESSAGES = {
    CatalogError.NOT_FOUND: "Buku tidak ditemukan",
}
UPDATE_MESSAGES = {
    None: "Buku berhasil diperbarui",
    CatalogError.MISSING_NAME: "Gagal memperbarui buku. Mohon isi nama buku",
    CatalogError.PAGE_COUNT_EXCEEDED: (
        "Gagal memperbarui buku. readPage tidak boleh lebih besar dari pageCount"
    ),
    CatalogError.NOT_FOUND: "Gagal memperbarui buku. Id tidak ditemukan",
}
DELETE_MESSAGES = {
    None: "Buku berhasil dihapus",
    CatalogError.NOT_FOUND: "Buku gagal dihapus. Id tidak ditemukan",
}

STATUS_CODES = {
    CatalogError.MISSING_NAME: 400,
    CatalogError.PAGE_COUNT_EXCEEDED: 400,
    CatalogError.NOT_FOUND: 404,
    CatalogError.INSERTION_FAILED: 500,
}


def envelope(
    status: str,
    message: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> JSONResponse:
    """Build a response envelope, leaving out ``message``/``data`` when unset."""
    body: Dict[str, Any] = {"status": status}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return JSONResponse(status_code=status_code, content=body)


def fail(error: CatalogError, messages: Dict[Optional[CatalogError], str]) -> JSONResponse:
    return envelope("fail", messages[error], status_code=STATUS_CODES[error])


def validation_message(errors: List[Dict[str, Any]]) -> str:
    """Describe the first validation error as ``field: reason``."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


@router.post("/books", status_code=201)
def add_book(
    payload: BookPayload = Body(...),
    catalog: Catalog = Depends(get_catalog),
) -> JSONResponse:
    outcome = catalog.create(payload)
    if not outcome.ok:
        return fail(outcome.error, ADD_MESSAGES)
    return envelope(
        "success",
        ADD_MESSAGES[None],
        data={"bookId": outcome.value},
        status_code=201,
    )


@router.get("/books")
def list_books(
    name: Optional[str] = Query(default=None, description="Substring of the book name"),
    reading: Optional[str] = Query(default=None, description="Reading flag, e.g. 0 or 1"),
    finished: Optional[str] = Query(default=None, description="Finished flag, e.g. 0 or 1"),
    catalog: Catalog = Depends(get_catalog),
) -> JSONResponse:
    books = catalog.list(name=name, reading=reading, finished=finished)
    return envelope(
        "success",
        data={"books": [b.model_dump(by_alias=True) for b in books]},
    )


@router.get("/books/{book_id}")
def get_book(book_id: str, catalog: Catalog = Depends(get_catalog)) -> JSONResponse:
    outcome = catalog.get_by_id(book_id)
    if not outcome.ok:
        return fail(outcome.error, GET_MESSAGES)
    return envelope("success", data={"book": outcome.value.model_dump(by_alias=True)})


@router.put("/books/{book_id}")
def update_book(
    book_id: str,
    body: Any = Body(default=None),
    catalog: Catalog = Depends(get_catalog),
) -> JSONResponse:
    # an unknown id is reported before the body is looked at
    if not catalog.get_by_id(book_id).ok:
        return fail(CatalogError.NOT_FOUND, UPDATE_MESSAGES)
    try:
        payload = BookPayload.model_validate(body)
    except ValidationError as exc:
        return envelope("fail", validation_message(exc.errors()), status_code=400)
    outcome = catalog.update_by_id(book_id, payload)
    if not outcome.ok:
        return fail(outcome.error, UPDATE_MESSAGES)
    return envelope("success", UPDATE_MESSAGES[None])


@router.delete("/books/{book_id}")
def delete_book(book_id: str, catalog: Catalog = Depends(get_catalog)) -> JSONResponse:
    outcome = catalog.delete_by_id(book_id)
    if not outcome.ok:
        return fail(outcome.error, DELETE_MESSAGES)
    return envelope("success", DELETE_MESSAGES[None])
