"""NiceGUI notebook page: PDF viewer beside a chat with page citations."""

import logging
import os

import httpx
from nicegui import events, ui

from notebook_llm.citations.navigation import viewer_url
from notebook_llm.models.schemas import (
    ChatMessage,
    DocumentInfo,
    MessageRole,
    PDFUploadResponse,
    QuestionAnswer,
)
from notebook_llm.session import NoDocumentLoadedError, NotebookSession, format_file_size

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .header { background: linear-gradient(135deg, #3b82f6 0%, #9333ea 100%); }

    .message-user {
        background: linear-gradient(135deg, #3b82f6 0%, #9333ea 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .citation-chip { font-size: 11px !important; }

    .pdf-frame { width: 100%; height: 100%; border: 0; }
</style>
"""


class ApiError(Exception):
    """Raised when the notebook API rejects a request."""


def _error_detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None
    return detail if isinstance(detail, str) else f"HTTP {response.status_code}"


async def upload_document(filename: str, content: bytes) -> DocumentInfo:
    """Send a PDF to the upload endpoint.

    Raises:
        ApiError: If the upload is rejected or the API is unreachable.
    """
    async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=180.0) as client:
        try:
            response = await client.post(
                "/upload/pdf",
                files={"file": (filename, content, "application/pdf")},
            )
        except httpx.RequestError as e:
            raise ApiError(f"Connection failed: {e}") from e

    if response.is_error:
        raise ApiError(_error_detail(response))

    result = PDFUploadResponse.model_validate(response.json())
    return DocumentInfo(
        document_id=result.document_id or "",
        filename=result.filename,
        pages=result.pages,
        size=result.size,
    )


async def ask_question(document_id: str, question: str) -> QuestionAnswer:
    """Ask the Q&A endpoint about a document.

    Raises:
        ApiError: If the question fails or the API is unreachable.
    """
    async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=120.0) as client:
        try:
            response = await client.post(
                "/chat/ask",
                json={"document_id": document_id, "question": question},
            )
        except httpx.RequestError as e:
            raise ApiError(f"Connection failed: {e}") from e

    if response.is_error:
        raise ApiError(_error_detail(response))

    return QuestionAnswer.model_validate(response.json())


async def delete_document(document_id: str) -> None:
    """Release a document the viewer no longer shows.

    Raises:
        ApiError: If the API is unreachable or rejects the request.
    """
    async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=30.0) as client:
        try:
            response = await client.delete(f"/documents/{document_id}")
        except httpx.RequestError as e:
            raise ApiError(f"Connection failed: {e}") from e

    # Already gone is fine
    if response.is_error and response.status_code != 404:
        raise ApiError(_error_detail(response))


@ui.page("/")
def notebook_page() -> None:
    """Main notebook page."""
    ui.add_head_html(CUSTOM_CSS)
    session = NotebookSession()

    input_field: ui.textarea

    @ui.refreshable
    def viewer() -> None:
        document = session.document
        if document is None:
            return
        page = session.viewer.current_page
        with ui.row().classes("w-full items-center justify-between px-4 py-2 bg-white border-b"):
            with ui.column().classes("gap-0"):
                ui.label(document.filename).classes("text-sm font-semibold truncate")
                ui.label(
                    f"{document.pages} pages · {format_file_size(document.size)}"
                ).classes("text-xs text-gray-500")
            with ui.row().classes("items-center gap-1"):
                ui.button(
                    icon="chevron_left",
                    on_click=lambda: session.viewer.go_to_page(max(page - 1, 1)),
                ).props("flat round dense")
                ui.label(f"Page {page}").classes("text-xs text-gray-600")
                ui.button(
                    icon="chevron_right",
                    on_click=lambda: session.viewer.go_to_page(min(page + 1, document.pages)),
                ).props("flat round dense")
        file_url = f"{API_BASE_URL}/documents/{document.document_id}/pdf"
        ui.element("iframe").props(f'src="{viewer_url(file_url, page)}"').classes(
            "pdf-frame flex-grow"
        )

    session.viewer.subscribe(lambda _page: viewer.refresh())

    def render_message(msg: ChatMessage) -> None:
        is_user = msg.role is MessageRole.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes(f"max-w-[85%] gap-1 px-4 py-3 {bubble}"):
                if is_user:
                    ui.label(msg.content).classes("text-sm whitespace-pre-wrap")
                else:
                    ui.markdown(msg.content).classes("text-sm")
                if msg.citations:
                    with ui.row().classes("gap-1 items-center"):
                        ui.label("Sources:").classes("text-xs text-gray-500")
                        for page in msg.citations:
                            ui.button(
                                f"Page {page}",
                                on_click=lambda p=page: session.on_citation_click(p),
                            ).props("outline rounded dense size=sm").classes("citation-chip")

    @ui.refreshable
    def messages() -> None:
        for msg in session.messages:
            render_message(msg)
        if session.is_loading:
            with ui.row().classes("w-full justify-start"):
                with ui.row().classes("message-assistant px-4 py-3 items-center gap-2"):
                    ui.spinner(size="sm")
                    ui.label("Thinking...").classes("text-sm text-gray-500 italic")

    async def handle_upload(e: events.UploadEventArguments) -> None:
        filename = e.file.name
        if not filename.lower().endswith(".pdf"):
            ui.notify("Please upload a valid PDF file.", type="negative")
            return
        processing.set_visibility(True)
        try:
            document = await upload_document(filename, await e.file.read())
        except ApiError as err:
            # Keep whatever document was already loaded
            ui.notify(f"PDF Processing Failed: {err}", type="negative")
            return
        finally:
            processing.set_visibility(False)
            uploader.reset()

        previous = session.document
        session.load_document(document)
        ui.notify("Your document is ready for analysis and questions.", type="positive")
        layout.refresh()
        if previous is not None:
            await release_document(previous.document_id)

    async def release_document(document_id: str) -> None:
        try:
            await delete_document(document_id)
        except ApiError as err:
            logger.warning(f"Could not release document {document_id}: {err}")

    async def send_message() -> None:
        text = input_field.value.strip()
        if not text or session.is_loading:
            return
        try:
            document = session.require_document()
        except NoDocumentLoadedError as err:
            ui.notify(str(err), type="negative")
            return

        input_field.value = ""
        session.add_question(text)
        session.is_loading = True
        messages.refresh()
        try:
            answer = await ask_question(document.document_id, text)
        except ApiError as err:
            session.add_error()
            ui.notify(f"Failed to get response: {err}", type="negative")
        else:
            session.add_answer(answer)
        finally:
            session.is_loading = False
            messages.refresh()

    def show_uploader() -> None:
        # The loaded document stays until a replacement uploads successfully
        upload_area.set_visibility(True)

    async def close_document() -> None:
        previous = session.document
        session.new_upload()
        layout.refresh()
        if previous is not None:
            await release_document(previous.document_id)

    # === UI Layout ===
    with ui.row().classes("w-full header px-5 py-3 items-center justify-between"):
        with ui.row().classes("items-center gap-3"):
            ui.icon("menu_book").classes("text-white text-3xl")
            ui.label("Notebook LLM").classes("text-lg font-semibold text-white")
        with ui.row().classes("items-center gap-1"):
            ui.button("New PDF", icon="upload_file", on_click=show_uploader).props(
                "flat color=white"
            )
            ui.button(icon="close", on_click=close_document).props("flat round color=white")

    with ui.column().classes("w-full items-center gap-2") as upload_area:
        uploader = (
            ui.upload(label="Drop a PDF here", on_upload=handle_upload, auto_upload=True)
            .props("accept=.pdf")
            .classes("w-96")
        )
        with ui.row().classes("items-center gap-2") as processing:
            ui.spinner(size="sm")
            ui.label("Processing PDF...").classes("text-sm text-gray-500")
        processing.set_visibility(False)

    @ui.refreshable
    def layout() -> None:
        nonlocal input_field
        upload_area.set_visibility(not session.has_document)
        if not session.has_document:
            return
        with ui.row().classes("w-full no-wrap gap-0").style("height: calc(100vh - 4rem)"):
            with ui.column().classes("w-1/2 h-full gap-0 bg-gray-100"):
                viewer()
            with ui.column().classes("w-1/2 h-full gap-0 bg-white"):
                with ui.scroll_area().classes("flex-grow w-full"):
                    with ui.column().classes("w-full p-4 gap-3"):
                        messages()
                with ui.row().classes("w-full p-3 gap-2 items-end border-t"):
                    input_field = (
                        ui.textarea(placeholder="Ask a question about your PDF...")
                        .props("autogrow outlined dense rows=1")
                        .classes("flex-grow")
                        .on("keydown.enter.prevent", send_message)
                    )
                    ui.button(icon="send", on_click=send_message).props("round unelevated")

    layout()


def main() -> None:
    ui.run(title="Notebook LLM", port=8080, reload=False)


if __name__ == "__main__":
    main()
