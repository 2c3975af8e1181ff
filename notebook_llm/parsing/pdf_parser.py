"""PDF parsing module using pypdf.

Validates uploads, counts pages, and extracts page-delimited text locally.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
PAGE_HEADER = "## Page {number}"


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Page-delimited text content from all pages.
        pages: Total number of pages in the document.
        metadata: Document metadata (title, author, etc.).
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str | None]


class PDFParseError(Exception):
    """Raised when PDF parsing fails."""

    pass


def validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        PDFParseError: If validation fails.
    """
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _extract_metadata(reader: PdfReader) -> dict[str, str | None]:
    metadata: dict[str, str | None] = {}

    try:
        if reader.metadata:
            metadata["title"] = reader.metadata.get("/Title")
            metadata["author"] = reader.metadata.get("/Author")
            metadata["subject"] = reader.metadata.get("/Subject")
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return {k: str(v) for k, v in metadata.items() if v is not None}


def join_pages(page_texts: list[str]) -> str:
    """Join per-page text under numbered headers.

    The headers give the assistant something to cite ("page 3").
    Pages without text are skipped but keep their numbering.

    Args:
        page_texts: Text of each page, in page order.

    Returns:
        Combined text.
    """
    sections = [
        f"{PAGE_HEADER.format(number=number)}\n\n{text.strip()}"
        for number, text in enumerate(page_texts, start=1)
        if text and text.strip()
    ]
    return "\n\n".join(sections)


def parse_pdf(file_content: bytes) -> PDFContent:
    """Parse a PDF file and extract its text content.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFContent with extracted text, page count, and metadata.

    Raises:
        PDFParseError: If the file is invalid, too large, empty, or corrupt.
    """
    validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    page_texts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_texts.append(page.extract_text() or "")
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            page_texts.append("")

    text = join_pages(page_texts)

    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(
        text=text,
        pages=pages,
        metadata=_extract_metadata(reader),
    )
