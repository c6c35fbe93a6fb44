"""Expose constructed client wrappers."""

from .document_store import SQLiteDocumentStore

__all__ = ["SQLiteDocumentStore"]
