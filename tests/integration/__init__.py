"""Integration tests for the HTTP API.

Runs the real FastAPI app over ASGITransport. Only the language model and
the LlamaParse service are mocked.
"""
