"""Document text extraction service.

Chooses between LlamaParse and local pypdf extraction per configuration.
"""

import logging

from notebook_llm.parsing.config import ParserBackend, ParserConfig, get_parser_config
from notebook_llm.parsing.llama_parse import LlamaParseClient
from notebook_llm.parsing.pdf_parser import PDFContent

logger = logging.getLogger(__name__)


class TextExtractor:
    """Extracts the text the assistant answers from."""

    def __init__(
        self,
        config: ParserConfig | None = None,
        client: LlamaParseClient | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            config: Optional parser configuration.
                    Loads from environment if not provided.
            client: Optional LlamaParse client override.
        """
        self._config = config or get_parser_config()
        self._client = client or LlamaParseClient(self._config)

    async def extract(self, file_content: bytes, parsed: PDFContent) -> str:
        """Extract text for an already validated PDF.

        Args:
            file_content: Raw bytes of the PDF file.
            parsed: Local parse result, used directly by the local backend.

        Returns:
            Document text.

        Raises:
            ExtractionError: If the parsing service fails.
        """
        if self._config.backend is ParserBackend.LOCAL:
            return parsed.text

        text = await self._client.extract_text(file_content)
        logger.info(f"LlamaParse returned {len(text)} characters")
        return text


_text_extractor: TextExtractor | None = None


def get_text_extractor() -> TextExtractor:
    """Get or create the global text extractor."""
    global _text_extractor
    if _text_extractor is None:
        _text_extractor = TextExtractor()
    return _text_extractor
