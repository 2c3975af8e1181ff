"""Text extraction configuration.

Selects the extraction backend and holds LlamaParse credentials.
"""

import os
from enum import Enum

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

load_dotenv()

DEFAULT_LLAMA_PARSE_URL = "https://api.llamaindex.ai/api/parsing/upload"


class ParserBackend(str, Enum):
    """Where PDF text extraction happens."""

    LLAMAPARSE = "llamaparse"
    LOCAL = "local"


class ParserConfig(BaseModel):
    """Configuration for document text extraction.

    Attributes:
        backend: LlamaParse service or local pypdf extraction.
        api_key: LlamaCloud API key (llamaparse backend only).
        endpoint: LlamaParse upload URL.
        result_type: Output format requested from LlamaParse.
        timeout: Request timeout in seconds.
    """

    backend: ParserBackend = Field(
        default_factory=lambda: ParserBackend(os.getenv("PDF_PARSER", "llamaparse").lower()),
    )
    api_key: str = Field(default_factory=lambda: os.getenv("LLAMA_CLOUD_API_KEY", "").strip())
    endpoint: str = Field(
        default_factory=lambda: os.getenv("LLAMA_PARSE_URL", DEFAULT_LLAMA_PARSE_URL),
    )
    result_type: str = "markdown"
    timeout: float = Field(default=120.0, gt=0)

    @model_validator(mode="after")
    def require_api_key_for_llamaparse(self) -> "ParserConfig":
        """LlamaParse needs credentials; local extraction does not."""
        if self.backend is ParserBackend.LLAMAPARSE and not self.api_key:
            raise ValueError(
                "LLAMA_CLOUD_API_KEY is not set. Set it in .env or use PDF_PARSER=local"
            )
        return self


def get_parser_config() -> ParserConfig:
    """Create parser configuration from environment.

    Raises:
        ValueError: If the llamaparse backend is selected without an API key.
    """
    return ParserConfig()
