"""Per-user notebook state: loaded document, chat log, viewer page.

Kept free of UI code so the page logic can be tested directly.
"""

import logging
from datetime import datetime

from notebook_llm.citations.navigation import ViewerState
from notebook_llm.models.schemas import ChatMessage, DocumentInfo, MessageRole, QuestionAnswer

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = """**Your document is ready!**

You can now ask questions about your document. For example:
- "What is the main topic of this document?"
- "Can you summarize the key points?"
- "What are the conclusions or recommendations?"
"""

ERROR_MESSAGE = (
    "Sorry, I encountered an error trying to answer your question. Please try again."
)


class NoDocumentLoadedError(Exception):
    """Raised when a question is asked before a PDF is loaded."""


def format_file_size(size: int) -> str:
    """Format a byte count for display ("0 Bytes", "1.5 KB", ...)."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {units[unit]}"


class NotebookSession:
    """Manages notebook state for a user session.

    The message log is append-only; it is only ever replaced as a whole
    when a new document is loaded or the user starts over.
    """

    def __init__(self) -> None:
        self.document: DocumentInfo | None = None
        self.viewer = ViewerState()
        self.started_at: datetime | None = None
        self.is_loading: bool = False
        self._messages: list[ChatMessage] = []

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def has_document(self) -> bool:
        return self.document is not None

    def _append(self, message: ChatMessage) -> ChatMessage:
        self._messages.append(message)
        return message

    def load_document(self, document: DocumentInfo) -> None:
        """Switch to a newly uploaded document.

        Only called after a successful upload, so a failed upload never
        disturbs the document already on screen.
        """
        self.document = document
        self._messages = []
        self.viewer.on_document_loaded()
        if self.started_at is None:
            self.started_at = datetime.now()
        self._append(ChatMessage(role=MessageRole.ASSISTANT, content=WELCOME_MESSAGE))
        logger.info(f"Loaded document {document.document_id} ({document.filename})")

    def require_document(self) -> DocumentInfo:
        """Return the loaded document.

        Raises:
            NoDocumentLoadedError: If no PDF has been loaded yet.
        """
        if self.document is None:
            raise NoDocumentLoadedError("Please upload a PDF before asking questions.")
        return self.document

    def add_question(self, question: str) -> ChatMessage:
        return self._append(ChatMessage(role=MessageRole.USER, content=question))

    def add_answer(self, answer: QuestionAnswer) -> ChatMessage:
        return self._append(
            ChatMessage(
                role=MessageRole.ASSISTANT,
                content=answer.answer,
                citations=tuple(answer.page_citations),
            )
        )

    def add_error(self) -> ChatMessage:
        return self._append(ChatMessage(role=MessageRole.ASSISTANT, content=ERROR_MESSAGE))

    def on_citation_click(self, page: int) -> None:
        self.viewer.on_citation_click(page)

    def new_upload(self) -> None:
        """Forget the current document and start over."""
        self.document = None
        self._messages = []
        self.viewer.on_document_loaded()
        self.started_at = None
