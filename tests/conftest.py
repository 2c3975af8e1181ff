"""Pytest fixtures and shared test configuration.

Fixtures:
    - make_pdf: Builds small text PDFs in memory
    - sample_pdf: Two-page PDF with text on each page
    - async_client: HTTPX client for API testing
    - isolated_services: Fresh document store and local text extraction per test
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

import notebook_llm.agent.qa_agent as qa_agent_module
import notebook_llm.documents.store as store_module
import notebook_llm.parsing.extraction as extraction_module
from notebook_llm.api import app
from notebook_llm.parsing.config import ParserBackend, ParserConfig
from notebook_llm.parsing.extraction import TextExtractor


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(page_texts: list[str]) -> bytes:
    """Build a minimal PDF with one line of Helvetica text per page.

    Args:
        page_texts: Text for each page; empty strings give blank pages.

    Returns:
        PDF file bytes with a valid cross-reference table.
    """
    page_ids = [4 + 2 * i for i in range(len(page_texts))]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(page_texts)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_id, text in zip(page_ids, page_texts, strict=True):
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_id + 1} 0 R >>"
            ).encode()
        )
        stream = f"BT /F1 12 Tf 72 720 Td ({_escape(text)}) Tj ET".encode() if text else b""
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[[list[str]], bytes]:
    """Return the in-memory PDF builder."""
    return build_pdf


@pytest.fixture
def sample_pdf() -> bytes:
    """Two-page PDF mentioning distinct topics per page."""
    return build_pdf(["Information security overview", "Access control policy"])


@pytest.fixture(autouse=True)
def isolated_services(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give every test an empty document store and local extraction.

    The agent singleton is cleared so no test inherits a configured model.
    """
    monkeypatch.setattr(store_module, "_document_store", None)
    monkeypatch.setattr(
        extraction_module,
        "_text_extractor",
        TextExtractor(ParserConfig(backend=ParserBackend.LOCAL, api_key="")),
    )
    monkeypatch.setattr(qa_agent_module, "_agent_service", None)


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
