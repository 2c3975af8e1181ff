"""PDF upload and document endpoints.

Handles file upload, validation, text extraction, and serving the stored
PDF to the viewer.
"""

import logging
import re
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Response, UploadFile, status

from notebook_llm.documents.store import Document, DocumentNotFoundError, get_document_store
from notebook_llm.models.schemas import DocumentInfo, PDFUploadResponse
from notebook_llm.parsing.extraction import get_text_extractor
from notebook_llm.parsing.llama_parse import ExtractionError
from notebook_llm.parsing.pdf_parser import MAX_FILE_SIZE, PDFParseError, parse_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])
documents_router = APIRouter(prefix="/documents", tags=["documents"])

# 10MB limit matches pdf_parser constant
MAX_UPLOAD_SIZE = MAX_FILE_SIZE


def _validate_file_extension(filename: str | None) -> str:
    """Validate that file has .pdf extension.

    Raises:
        HTTPException: 400 if extension is invalid.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    if not filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Please upload a valid PDF file.",
        )

    return filename


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_UPLOAD_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )

    return content


@router.post("/pdf", response_model=PDFUploadResponse)
async def upload_pdf(file: UploadFile) -> PDFUploadResponse:
    """Upload and process a PDF document.

    Validates the file, counts its pages, extracts its text with the
    configured backend, and stores it for questions and viewing.

    Args:
        file: The uploaded PDF file (multipart/form-data).

    Returns:
        PDFUploadResponse with document id, filename, page count and size.

    Raises:
        400: Invalid file (not PDF, empty, corrupt).
        413: File exceeds 10MB limit.
        500: Text extraction is not configured.
        502: The document-parsing service failed.
    """
    filename = _validate_file_extension(file.filename)
    content = await _read_and_validate_size(file)

    try:
        pdf_content = parse_pdf(content)
    except PDFParseError as e:
        logger.warning(f"PDF parse error for {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    try:
        extractor = get_text_extractor()
    except ValueError as e:
        logger.error(f"Text extraction is not configured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Text extraction is not configured. Check LLAMA_CLOUD_API_KEY or PDF_PARSER.",
        ) from e

    try:
        text = await extractor.extract(content, pdf_content)
    except ExtractionError as e:
        logger.error(f"Text extraction failed for {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to extract text from PDF: {e}",
        ) from e

    document = get_document_store().add(
        Document(filename=filename, content=content, text=text, pages=pdf_content.pages)
    )
    logger.info(f"Successfully ingested PDF: {filename} ({pdf_content.pages} pages)")

    return PDFUploadResponse(
        document_id=document.id,
        filename=filename,
        pages=document.pages,
        size=document.size,
        success=True,
    )


def _get_document(document_id: str) -> Document:
    try:
        return get_document_store().get(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Document not found: {document_id}",
        ) from e


def _content_disposition(filename: str) -> str:
    """Inline disposition with an ASCII fallback name and the UTF-8 original."""
    safe_name = re.sub(r"[^\w\-.]", "_", filename, flags=re.ASCII)
    return f"inline; filename=\"{safe_name}\"; filename*=UTF-8''{quote(filename, safe='')}"


@documents_router.get("/{document_id}", response_model=DocumentInfo)
async def get_document(document_id: str) -> DocumentInfo:
    """Return metadata for an ingested document."""
    return _get_document(document_id).info()


@documents_router.get("/{document_id}/pdf")
async def get_document_pdf(document_id: str) -> Response:
    """Serve the original PDF bytes for the embedded viewer."""
    document = _get_document(document_id)
    return Response(
        content=document.content,
        media_type="application/pdf",
        headers={"Content-Disposition": _content_disposition(document.filename)},
    )


@documents_router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: str) -> Response:
    """Drop a document the viewer no longer shows."""
    try:
        get_document_store().remove(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Document not found: {document_id}",
        ) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
