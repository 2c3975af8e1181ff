"""Citation pipeline connecting assistant text to PDF pages.

Turns unstructured answers into page numbers and page numbers into
viewer navigation.

Components:
    - page_citations: "page N" reference extraction
    - citation_links: [ref:<id>] marker annotation via a page mapping
    - navigation: current-page state driven by citation clicks

Everything here is synchronous and free of I/O.
"""

from notebook_llm.citations.citation_links import (
    CITATION_MARKER_PATTERN,
    link_citations,
    render_citation_button,
)
from notebook_llm.citations.navigation import (
    CitationClicked,
    DocumentLoaded,
    PageNavigated,
    ViewerState,
    reduce_page,
    viewer_url,
)
from notebook_llm.citations.page_citations import (
    PAGE_REFERENCE_PATTERN,
    extract_page_citations,
    iter_page_references,
)

__all__ = [
    "CITATION_MARKER_PATTERN",
    "PAGE_REFERENCE_PATTERN",
    "CitationClicked",
    "DocumentLoaded",
    "PageNavigated",
    "ViewerState",
    "extract_page_citations",
    "iter_page_references",
    "link_citations",
    "reduce_page",
    "render_citation_button",
    "viewer_url",
]
