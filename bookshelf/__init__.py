"""Bookshelf: an in-memory book catalogue served over HTTP."""

__version__ = "1.0.0"
