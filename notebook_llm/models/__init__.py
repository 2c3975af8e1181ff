"""Pydantic models for API requests, responses and chat state.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatMessage: Immutable message in the conversation log
    - QuestionRequest / QuestionAnswer: Document Q&A payloads
    - CitationLinkRequest / CitationLinkResponse: Marker annotation payloads
    - DocumentInfo / PDFUploadResponse: Ingested document details
"""

from notebook_llm.models.schemas import (
    ChatMessage,
    CitationLinkRequest,
    CitationLinkResponse,
    DocumentInfo,
    MessageRole,
    PDFUploadResponse,
    QuestionAnswer,
    QuestionRequest,
)

__all__ = [
    "ChatMessage",
    "CitationLinkRequest",
    "CitationLinkResponse",
    "DocumentInfo",
    "MessageRole",
    "PDFUploadResponse",
    "QuestionAnswer",
    "QuestionRequest",
]
