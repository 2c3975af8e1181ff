"""Unit tests for individual components in isolation.

Coverage:
    - citations/: Page extraction, citation links, navigation
    - session: Notebook state transitions
    - parsing/: PDF validation, local and LlamaParse extraction
    - agent/: Agent configuration and question answering
"""
