"""Inline citation links for assistant responses.

Rewrites ``[ref:<identifier>]`` markers into jump-to-page controls using a
mapping from identifier to page number.
"""

import re
from collections.abc import Callable, Mapping

CITATION_MARKER_PATTERN = re.compile(r"\[ref:(.*?)\]")


def render_citation_button(page: int) -> str:
    """Render the default HTML control for a page citation."""
    return f'<button class="citation-button" data-page="{page}">Page {page}</button>'


def link_citations(
    response: str,
    page_mapping: Mapping[str, int],
    render: Callable[[int], str] = render_citation_button,
) -> str:
    """Replace mapped citation markers with page controls.

    Markers are visited left to right over the original response. Each
    replacement targets the literal marker text, so repeated identical
    markers all end up with the same control. Markers whose identifier is
    missing from the mapping are kept verbatim.

    Args:
        response: AI response text possibly containing ``[ref:<id>]`` markers.
        page_mapping: Identifier to page number lookup.
        render: Builds the replacement for a page number.

    Returns:
        The annotated response.
    """
    output = response
    for match in CITATION_MARKER_PATTERN.finditer(response):
        page = page_mapping.get(match.group(1))
        if page is None:
            continue
        output = output.replace(match.group(0), render(page), 1)
    return output
