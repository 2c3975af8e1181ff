"""PDF parsing utilities for document processing.

Turns uploaded PDFs into the text the assistant answers from.

Responsibilities:
    - Upload validation (header, size) and page counting with pypdf
    - Local page-delimited text extraction with pypdf
    - Remote extraction through the LlamaParse service
"""

from notebook_llm.parsing.extraction import TextExtractor, get_text_extractor
from notebook_llm.parsing.llama_parse import ExtractionError, LlamaParseClient
from notebook_llm.parsing.pdf_parser import PDFContent, PDFParseError, parse_pdf

__all__ = [
    "ExtractionError",
    "LlamaParseClient",
    "PDFContent",
    "PDFParseError",
    "TextExtractor",
    "get_text_extractor",
    "parse_pdf",
]
