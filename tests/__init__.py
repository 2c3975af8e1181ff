"""Test package for Notebook LLM.

Structure:
    - unit/: Citation pipeline, session state, parsing and agent tests
    - integration/: API workflows through the ASGI app

Third-party services (LLM, LlamaParse) are replaced with mocks; PDFs are
built in memory by fixtures.
"""
