"""LlamaParse client for third-party PDF text extraction.

Sends the PDF as a base64 data URI and joins the returned documents.
"""

import base64
import logging

import httpx

from notebook_llm.parsing.config import ParserConfig

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when the document-parsing service fails."""

    pass


def to_data_uri(file_content: bytes) -> str:
    """Encode PDF bytes as a ``data:application/pdf;base64,...`` URI."""
    encoded = base64.b64encode(file_content).decode("ascii")
    return f"data:application/pdf;base64,{encoded}"


class LlamaParseClient:
    """Thin async wrapper over the LlamaParse upload endpoint."""

    def __init__(
        self,
        config: ParserConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Parser configuration with endpoint and API key.
            transport: Optional httpx transport (used by tests).
        """
        self._config = config
        self._transport = transport

    async def extract_text(self, file_content: bytes) -> str:
        """Extract markdown text from a PDF.

        Args:
            file_content: Raw bytes of the PDF file.

        Returns:
            Text of all returned documents separated by blank lines.
            Empty if the service returned no documents.

        Raises:
            ExtractionError: If the key is missing, the request fails,
                or the service responds with an error.
        """
        if not self._config.api_key:
            raise ExtractionError("LLAMA_CLOUD_API_KEY is not set in environment variables.")

        payload = {
            "data": to_data_uri(file_content),
            "result_type": self._config.result_type,
        }
        headers = {"Authorization": f"Bearer {self._config.api_key}"}

        async with httpx.AsyncClient(
            timeout=self._config.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(self._config.endpoint, json=payload, headers=headers)
            except httpx.RequestError as e:
                logger.error(f"Failed to reach LlamaParse API: {e}")
                raise ExtractionError(f"Fetch failed: {e}") from e

        if response.is_error:
            logger.error(f"LlamaParse API error: {response.text}")
            raise ExtractionError(f"LlamaParse API error: {response.reason_phrase}")

        try:
            body = response.json()
        except ValueError as e:
            raise ExtractionError("LlamaParse API returned invalid JSON") from e

        if not isinstance(body, dict):
            raise ExtractionError("LlamaParse API returned an unexpected payload")

        documents = body.get("documents") or []
        return "\n\n".join(doc.get("text", "") for doc in documents if isinstance(doc, dict))
