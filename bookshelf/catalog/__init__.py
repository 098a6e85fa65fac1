"""
Catalog package for the bookshelf API.

This package holds the in-memory ``Catalog`` of book records together
with the schemas and routes that expose it over HTTP. Records live only
as long as the process; the ``Catalog`` instance attached to the
application is the single owner of that state, and routes reach it
through a dependency rather than a module-level list.
"""

from .router import router as catalog_router  # noqa: F401
from .store import Catalog, CatalogError, Outcome  # noqa: F401
