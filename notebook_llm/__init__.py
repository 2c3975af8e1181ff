"""Notebook LLM - chat with a PDF and jump to the pages the answers cite.

Combines FastAPI for the HTTP API, Agno for LLM calls, LlamaParse or pypdf
for text extraction, NiceGUI for the side-by-side viewer and chat, and
Pydantic for data validation.

Components:
    - citations: page citation extraction, citation links, viewer navigation
    - api: HTTP endpoints
    - agent: question answering over the extracted document text
    - parsing: PDF validation and text extraction
    - documents: in-memory store of uploaded PDFs
    - session: per-user notebook state
    - ui: Web interface
    - models: Request/response schemas
"""

__version__ = "0.1.0"
