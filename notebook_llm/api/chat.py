"""Question answering and citation link endpoints."""

import logging

from fastapi import APIRouter, HTTPException, status

from notebook_llm.agent.qa_agent import QuestionAnsweringError, get_agent_service
from notebook_llm.citations.citation_links import link_citations
from notebook_llm.documents.store import DocumentNotFoundError, get_document_store
from notebook_llm.models.schemas import (
    CitationLinkRequest,
    CitationLinkResponse,
    QuestionAnswer,
    QuestionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])
citations_router = APIRouter(prefix="/citations", tags=["citations"])


@router.post("/ask", response_model=QuestionAnswer)
async def ask_question(request: QuestionRequest) -> QuestionAnswer:
    """Answer a question about an uploaded document.

    Returns:
        The complete answer and the pages it cites.

    Raises:
        404: Unknown document id.
        500: The language model is not configured.
        502: The language model call failed.
    """
    try:
        document = get_document_store().get(request.document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No PDF loaded. Please upload a PDF before asking questions.",
        ) from e

    try:
        agent_service = get_agent_service()
    except ValueError as e:
        logger.error(f"Agent is not configured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Language model is not configured. Check LLM_API_KEY.",
        ) from e

    try:
        return await agent_service.answer_question(document.text, request.question)
    except QuestionAnsweringError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to get response. Please try again.",
        ) from e


@citations_router.post("/links", response_model=CitationLinkResponse)
async def generate_citation_links(request: CitationLinkRequest) -> CitationLinkResponse:
    """Replace ``[ref:<id>]`` markers with page citation buttons."""
    return CitationLinkResponse(
        annotated=link_citations(request.response, request.page_mapping)
    )
