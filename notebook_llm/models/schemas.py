import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator, model_validator


class MessageRole(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single entry in the conversation log.

    Messages are immutable once created.

    Attributes:
        id: Unique message identifier.
        role: Who sent the message.
        content: The message text.
        citations: Pages cited by an assistant answer, in first-seen order.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: MessageRole
    content: str
    citations: tuple[int, ...] | None = None

    @model_validator(mode="after")
    def citations_only_on_answers(self) -> "ChatMessage":
        if self.citations is not None and self.role is MessageRole.USER:
            raise ValueError("Only assistant messages carry citations")
        return self


class QuestionRequest(BaseModel):
    """Request payload for asking a question about a document.

    Attributes:
        document_id: Identifier returned by the upload endpoint.
        question: User's question about the document.
    """

    document_id: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)

    @field_validator("question", mode="before")
    @classmethod
    def strip_question(cls, v: str) -> str:
        """Strip whitespace from question before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class QuestionAnswer(BaseModel):
    """Answer from the assistant with the pages it cites.

    Attributes:
        answer: The assistant's complete answer text.
        page_citations: Distinct pages mentioned in the answer.
    """

    answer: str
    page_citations: list[int] = Field(default_factory=list)


class CitationLinkRequest(BaseModel):
    """Request payload for annotating citation markers.

    Attributes:
        response: AI response containing ``[ref:<id>]`` markers.
        page_mapping: Identifier to page number lookup.
    """

    response: str
    page_mapping: dict[str, PositiveInt] = Field(default_factory=dict)


class CitationLinkResponse(BaseModel):
    """Annotated response text."""

    annotated: str


class DocumentInfo(BaseModel):
    """Metadata for an ingested document.

    Attributes:
        document_id: Identifier used for questions and PDF retrieval.
        filename: Original file name.
        pages: Number of pages in the PDF.
        size: File size in bytes.
    """

    document_id: str
    filename: str
    pages: int = Field(ge=0)
    size: int = Field(ge=0)


class PDFUploadResponse(BaseModel):
    """Response after PDF upload processing.

    Attributes:
        document_id: Identifier of the stored document.
        filename: Name of the uploaded file.
        pages: Number of pages in the document.
        size: File size in bytes.
        success: Whether the upload was successful.
        error: Error message if upload failed.
    """

    document_id: str | None = None
    filename: str
    pages: int
    size: int = 0
    success: bool
    error: str | None = None
