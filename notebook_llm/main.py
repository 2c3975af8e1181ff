"""Application entry point.

Serves the API and the notebook UI from one FastAPI app on port 8000,
or as two processes when RUN_MODE=separate (API on 8000, UI on 8080).
Environment variables are loaded from .env file.
"""

import logging
import os
import subprocess
import sys

from dotenv import load_dotenv

# Environment must be loaded before config modules read it
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Send application logs to stdout at LOG_LEVEL."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def run_integrated() -> None:
    """Mount NiceGUI onto the FastAPI app and serve both with uvicorn."""
    import uvicorn
    from nicegui import ui

    from notebook_llm.api.app import create_app
    from notebook_llm.ui.chat_page import notebook_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(
        app,
        title="Notebook LLM",
        favicon="📄",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "notebook-llm-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Notebook UI on http://localhost:{port}/, API docs on /docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the API and the UI as two child processes until either exits."""
    api_cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "notebook_llm.api.app:app",
        "--host",
        os.getenv("HOST", "0.0.0.0"),
        "--port",
        "8000",
    ]
    ui_cmd = [sys.executable, "-c", "from notebook_llm.ui.chat_page import main; main()"]

    logger.info("Starting API on http://localhost:8000 and UI on http://localhost:8080")
    processes = [subprocess.Popen(api_cmd), subprocess.Popen(ui_cmd)]
    try:
        while all(proc.poll() is None for proc in processes):
            try:
                processes[0].wait(timeout=1)
            except subprocess.TimeoutExpired:
                continue
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in processes:
            proc.terminate()
        for proc in processes:
            proc.wait()


def main() -> None:
    """Start Notebook LLM in the mode selected by RUN_MODE."""
    configure_logging()
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting Notebook LLM in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
