"""In-memory document store.

Keeps each uploaded PDF with its extracted text so the viewer can load it
and questions can be answered against it. Nothing is persisted.
"""

import logging
import uuid
from dataclasses import dataclass, field

from notebook_llm.models.schemas import DocumentInfo

logger = logging.getLogger(__name__)


class DocumentNotFoundError(KeyError):
    """Raised when a document id is unknown."""


@dataclass(frozen=True)
class Document:
    """An ingested PDF."""

    filename: str
    content: bytes = field(repr=False)
    text: str = field(repr=False)
    pages: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def size(self) -> int:
        return len(self.content)

    def info(self) -> DocumentInfo:
        return DocumentInfo(
            document_id=self.id,
            filename=self.filename,
            pages=self.pages,
            size=self.size,
        )


class DocumentStore:
    """Dictionary-backed store keyed by document id."""

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}

    def add(self, document: Document) -> Document:
        self._documents[document.id] = document
        logger.info(f"Stored document {document.id} ({document.filename})")
        return document

    def get(self, document_id: str) -> Document:
        """Look up a document.

        Raises:
            DocumentNotFoundError: If no document has this id.
        """
        try:
            return self._documents[document_id]
        except KeyError:
            raise DocumentNotFoundError(document_id) from None

    def remove(self, document_id: str) -> Document:
        """Evict a document and return it.

        Raises:
            DocumentNotFoundError: If no document has this id.
        """
        try:
            document = self._documents.pop(document_id)
        except KeyError:
            raise DocumentNotFoundError(document_id) from None
        logger.info(f"Removed document {document_id} ({document.filename})")
        return document

    def __len__(self) -> int:
        return len(self._documents)


_document_store: DocumentStore | None = None


def get_document_store() -> DocumentStore:
    """Get or create the global document store."""
    global _document_store
    if _document_store is None:
        _document_store = DocumentStore()
    return _document_store
