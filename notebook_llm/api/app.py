"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notebook_llm import __version__
from notebook_llm.api.chat import citations_router
from notebook_llm.api.chat import router as chat_router
from notebook_llm.api.routes import documents_router
from notebook_llm.api.routes import router as upload_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting Notebook LLM API...")
    yield
    logger.info("Shutting down Notebook LLM API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Notebook LLM API",
        description=(
            "Chat with a PDF. Extracts document text, answers questions with "
            "page citations, and annotates citation markers as page links."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(upload_router)
    application.include_router(documents_router)
    application.include_router(chat_router)
    application.include_router(citations_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "notebook-llm"}

    return application


app = create_app()
