"""Agno agent service for answering questions about a PDF.

Each question is answered from the full extracted document text, and the
page numbers mentioned in the answer are collected as citations.

Architecture notes:

1. **Stateless questions** - The whole document text travels with every
   question, so the agent keeps no session storage or vector index.

2. **Singleton Pattern** - Agent construction (model client, HTTP pool) is
   reused across requests rather than rebuilt per question.

3. **Service Wrapper** - Decouples the API from Agno's interface and is the
   single place where LLM failures become QuestionAnsweringError.

4. **Complete responses only** - Citations are extracted once, from the
   finished answer, never from partial streamed text.
"""

import logging

from agno.agent import Agent
from agno.models.openai import OpenAIChat

from notebook_llm.agent.config import AgentConfig, get_agent_config
from notebook_llm.citations.page_citations import extract_page_citations
from notebook_llm.models.schemas import QuestionAnswer

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You're a helpful assistant that answers questions based on PDF content "
    "and returns cited page numbers if possible."
)
NO_ANSWER = "No answer found."


class QuestionAnsweringError(Exception):
    """Raised when the language model call fails."""

    pass


def build_prompt(pdf_text: str, question: str) -> str:
    """Build the user prompt carrying the document and the question."""
    return (
        f"Here is the PDF text:\n{pdf_text}\n\n"
        f"Question: {question}\n\n"
        "Return answer and any page numbers you refer to."
    )


class AgentService:
    """Service for managing the Agno Q&A agent.

    Wraps Agno's Agent with:
    - OpenAI-compatible model configuration
    - Page citation extraction on complete answers
    - Singleton lifecycle management
    - Centralized error handling
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Configured Agent with an OpenAI-compatible chat model.
        """
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        return Agent(
            model=model,
            description=SYSTEM_PROMPT,
            instructions=[
                "Answer only from the provided PDF text.",
                "Mention the page of each fact you use, written as 'page N'.",
            ],
            # Output as markdown for rich formatting in UI
            markdown=True,
        )

    async def answer_question(self, pdf_text: str, question: str) -> QuestionAnswer:
        """Answer a question about a document.

        Args:
            pdf_text: Extracted document text.
            question: The user's question.

        Returns:
            QuestionAnswer with the answer and the pages it cites.

        Raises:
            QuestionAnsweringError: If the model call fails.
        """
        try:
            response = await self._agent.arun(build_prompt(pdf_text, question))
        except Exception as e:
            logger.error(f"Question answering failed: {e}")
            raise QuestionAnsweringError(str(e)) from e

        answer = response.content or NO_ANSWER
        if not isinstance(answer, str):
            answer = str(answer)

        citations = extract_page_citations(answer)
        logger.info(f"Answered question with {len(citations)} page citation(s)")
        return QuestionAnswer(answer=answer, page_citations=citations)


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Returns:
        The AgentService instance.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service
