"""Viewer page state driven by citation clicks.

The viewer shows a single "current page". Clicking a citation or
navigating explicitly moves it; loading a new document resets it to 1.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

FIRST_PAGE = 1


@dataclass(frozen=True)
class CitationClicked:
    """User activated a citation control for a page."""

    page: int


@dataclass(frozen=True)
class PageNavigated:
    """User navigated the viewer to a page directly."""

    page: int


@dataclass(frozen=True)
class DocumentLoaded:
    """A new document replaced the one in the viewer."""


NavigationEvent = CitationClicked | PageNavigated | DocumentLoaded


def reduce_page(current_page: int, event: NavigationEvent) -> int:
    """Compute the next current page for an event.

    Page numbers are not checked against the document length.

    Args:
        current_page: The page shown before the event.
        event: The navigation event.

    Returns:
        The page the viewer should display.
    """
    if isinstance(event, DocumentLoaded):
        return FIRST_PAGE
    if isinstance(event, (CitationClicked, PageNavigated)):
        return event.page
    return current_page


def viewer_url(file_url: str, page: int) -> str:
    """Build the embedded viewer URL for a page of a PDF."""
    return f"{file_url}#page={page}&toolbar=1&navpanes=1&scrollbar=1&view=FitH"


class ViewerState:
    """Holds the current page and notifies observers when it changes.

    Last write wins: rapid clicks are applied in the order they arrive.
    """

    def __init__(self) -> None:
        self._current_page = FIRST_PAGE
        self._listeners: list[Callable[[int], None]] = []

    @property
    def current_page(self) -> int:
        return self._current_page

    def subscribe(self, listener: Callable[[int], None]) -> None:
        """Register a callback invoked with the new page after each event."""
        self._listeners.append(listener)

    def dispatch(self, event: NavigationEvent) -> int:
        """Apply an event and notify listeners.

        Returns:
            The new current page.
        """
        self._current_page = reduce_page(self._current_page, event)
        logger.debug(f"Viewer moved to page {self._current_page} on {event!r}")
        for listener in self._listeners:
            listener(self._current_page)
        return self._current_page

    def on_citation_click(self, page: int) -> None:
        self.dispatch(CitationClicked(page))

    def go_to_page(self, page: int) -> None:
        self.dispatch(PageNavigated(page))

    def on_document_loaded(self) -> None:
        self.dispatch(DocumentLoaded())
