"""FastAPI endpoints for Notebook LLM.

Endpoints:
    - GET /health: Service health status
    - POST /upload/pdf: PDF upload and text extraction
    - GET /documents/{id}: Document metadata
    - GET /documents/{id}/pdf: Original PDF for the viewer
    - POST /chat/ask: Question answering with page citations
    - POST /citations/links: Citation marker annotation
"""

from notebook_llm.api.app import app, create_app

__all__ = ["app", "create_app"]
