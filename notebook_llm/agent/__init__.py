"""Agno agent logic for document question answering.

Responsibilities:
    - Agent initialization with OpenAI-compatible models
    - Prompting with the full extracted document text
    - Page citation extraction from complete answers

Maintains clean separation from the HTTP layer.
"""

from notebook_llm.agent.config import AgentConfig, get_agent_config
from notebook_llm.agent.qa_agent import (
    AgentService,
    QuestionAnsweringError,
    get_agent_service,
)

__all__ = [
    "AgentConfig",
    "AgentService",
    "QuestionAnsweringError",
    "get_agent_config",
    "get_agent_service",
]
