"""In-memory registry of ingested documents."""

from notebook_llm.documents.store import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    get_document_store,
)

__all__ = ["Document", "DocumentNotFoundError", "DocumentStore", "get_document_store"]
