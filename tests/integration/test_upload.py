"""Integration tests for PDF upload and document endpoints.

Uses the real FastAPI app with local pypdf extraction; the LlamaParse
backend is replaced with a mock where its behavior matters.
"""

from unittest.mock import AsyncMock, MagicMock, patch

from httpx import AsyncClient

from notebook_llm.documents.store import Document, get_document_store
from notebook_llm.models.schemas import PDFUploadResponse
from notebook_llm.parsing.llama_parse import ExtractionError


async def _upload(client: AsyncClient, content: bytes, filename: str = "sample.pdf"):
    return await client.post(
        "/upload/pdf",
        files={"file": (filename, content, "application/pdf")},
    )


class TestPDFUpload:
    """Integration tests for POST /upload/pdf endpoint."""

    async def test_upload_pdf_success(self, async_client: AsyncClient, sample_pdf: bytes) -> None:
        """Upload valid PDF returns document id, page count and size."""
        response = await _upload(async_client, sample_pdf)

        assert response.status_code == 200
        data = PDFUploadResponse.model_validate(response.json())
        assert data.success is True
        assert data.filename == "sample.pdf"
        assert data.pages == 2
        assert data.size == len(sample_pdf)
        assert data.document_id
        assert data.error is None

    async def test_upload_stores_page_delimited_text(
        self, async_client: AsyncClient, sample_pdf: bytes
    ) -> None:
        response = await _upload(async_client, sample_pdf)

        document = get_document_store().get(response.json()["document_id"])
        assert "## Page 2" in document.text
        assert "Access control" in document.text

    async def test_upload_preserves_original_filename(
        self, async_client: AsyncClient, sample_pdf: bytes
    ) -> None:
        response = await _upload(async_client, sample_pdf, "my-custom-document.pdf")

        assert response.status_code == 200
        assert response.json()["filename"] == "my-custom-document.pdf"

    async def test_reject_non_pdf_extension(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/upload/pdf",
            files={"file": ("document.txt", b"plain text", "text/plain")},
        )

        assert response.status_code == 400
        assert "PDF" in response.json()["detail"]

    async def test_reject_fake_pdf_extension(self, async_client: AsyncClient) -> None:
        """File with .pdf extension but non-PDF content is rejected."""
        response = await _upload(async_client, b"This is not a real PDF file", "fake.pdf")

        assert response.status_code == 400
        assert "Invalid PDF" in response.json()["detail"]

    async def test_reject_oversized_file(self, async_client: AsyncClient) -> None:
        oversized_content = b"%PDF-1.4\n" + (b"x" * (10 * 1024 * 1024 + 1024))

        response = await _upload(async_client, oversized_content, "large.pdf")

        assert response.status_code == 413
        assert "10MB" in response.json()["detail"]

    async def test_reject_empty_file(self, async_client: AsyncClient) -> None:
        response = await _upload(async_client, b"", "empty.pdf")

        assert response.status_code == 400
        assert "detail" in response.json()

    async def test_reject_missing_filename(self, async_client: AsyncClient) -> None:
        response = await _upload(async_client, b"%PDF-1.4\n%minimal", "")

        # Empty filename rejected - 422 from FastAPI validation or 400 from our check
        assert response.status_code in (400, 422)

    async def test_llamaparse_text_is_stored(
        self, async_client: AsyncClient, sample_pdf: bytes
    ) -> None:
        extractor = MagicMock()
        extractor.extract = AsyncMock(return_value="# Remote markdown")

        with patch("notebook_llm.api.routes.get_text_extractor", return_value=extractor):
            response = await _upload(async_client, sample_pdf)

        assert response.status_code == 200
        assert get_document_store().get(response.json()["document_id"]).text == "# Remote markdown"

    async def test_extraction_failure_returns_502_and_stores_nothing(
        self, async_client: AsyncClient, sample_pdf: bytes
    ) -> None:
        extractor = MagicMock()
        extractor.extract = AsyncMock(side_effect=ExtractionError("LlamaParse API error: Bad Gateway"))

        with patch("notebook_llm.api.routes.get_text_extractor", return_value=extractor):
            response = await _upload(async_client, sample_pdf)

        assert response.status_code == 502
        assert "LlamaParse" in response.json()["detail"]
        assert len(get_document_store()) == 0

    async def test_unconfigured_extraction_returns_500(
        self, async_client: AsyncClient, sample_pdf: bytes
    ) -> None:
        with patch(
            "notebook_llm.api.routes.get_text_extractor",
            side_effect=ValueError("LLAMA_CLOUD_API_KEY is not set"),
        ):
            response = await _upload(async_client, sample_pdf)

        assert response.status_code == 500
        assert "not configured" in response.json()["detail"]


class TestDocumentEndpoints:
    """Integration tests for GET /documents endpoints."""

    async def test_document_info(self, async_client: AsyncClient, sample_pdf: bytes) -> None:
        document_id = (await _upload(async_client, sample_pdf)).json()["document_id"]

        response = await async_client.get(f"/documents/{document_id}")

        assert response.status_code == 200
        assert response.json() == {
            "document_id": document_id,
            "filename": "sample.pdf",
            "pages": 2,
            "size": len(sample_pdf),
        }

    async def test_document_pdf_bytes(self, async_client: AsyncClient, sample_pdf: bytes) -> None:
        document_id = (await _upload(async_client, sample_pdf)).json()["document_id"]

        response = await async_client.get(f"/documents/{document_id}/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content == sample_pdf

    async def test_unknown_document_returns_404(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/documents/missing/pdf")

        assert response.status_code == 404

    async def test_non_latin1_filename_is_served(
        self, async_client: AsyncClient, sample_pdf: bytes
    ) -> None:
        document_id = (await _upload(async_client, sample_pdf, filename="文档.pdf")).json()[
            "document_id"
        ]

        response = await async_client.get(f"/documents/{document_id}/pdf")

        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert 'filename="__.pdf"' in disposition
        assert "filename*=UTF-8''%E6%96%87%E6%A1%A3.pdf" in disposition

    async def test_quote_in_filename_does_not_break_header(
        self, async_client: AsyncClient, sample_pdf: bytes
    ) -> None:
        document = get_document_store().add(
            Document(filename='my "final" report.pdf', content=sample_pdf, text="", pages=2)
        )

        response = await async_client.get(f"/documents/{document.id}/pdf")

        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert 'filename="my__final__report.pdf"' in disposition
        assert "filename*=UTF-8''my%20%22final%22%20report.pdf" in disposition

    async def test_delete_document_evicts_it(
        self, async_client: AsyncClient, sample_pdf: bytes
    ) -> None:
        document_id = (await _upload(async_client, sample_pdf)).json()["document_id"]

        response = await async_client.delete(f"/documents/{document_id}")

        assert response.status_code == 204
        assert (await async_client.get(f"/documents/{document_id}")).status_code == 404
        assert len(get_document_store()) == 0

    async def test_delete_unknown_document_returns_404(self, async_client: AsyncClient) -> None:
        response = await async_client.delete("/documents/missing")

        assert response.status_code == 404


class TestUploadErrorHandling:
    """Tests for error scenarios in upload endpoint."""

    async def test_wrong_http_method_returns_405(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/upload/pdf")
        assert response.status_code == 405

    async def test_missing_file_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/upload/pdf")
        assert response.status_code == 422

    async def test_cors_headers_present(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/upload/pdf",
            files={"file": ("test.pdf", b"not a pdf", "application/pdf")},
            headers={"Origin": "http://localhost:3000"},
        )

        assert "access-control-allow-origin" in response.headers
