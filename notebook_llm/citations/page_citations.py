"""Page reference extraction from assistant answers.

Finds mentions like "page 3" or "Page 12" in free text and collects the
page numbers in the order they first appear.
"""

import re
from collections.abc import Iterator

# Keyword, whitespace, then the leading ASCII digit run ("page 12a" -> 12)
PAGE_REFERENCE_PATTERN = re.compile(r"page\s+([0-9]+)", re.IGNORECASE)

# Longer digit runs are not page numbers
MAX_PAGE_DIGITS = 9


def iter_page_references(text: str) -> Iterator[int]:
    """Lazily scan text for page references.

    Each call builds a fresh generator, so nothing is shared between scans.
    Duplicates are yielded as they occur.

    Args:
        text: Free-form text to scan.

    Yields:
        Page numbers in order of appearance.
    """
    for match in PAGE_REFERENCE_PATTERN.finditer(text):
        digits = match.group(1).lstrip("0")
        if len(digits) > MAX_PAGE_DIGITS:
            continue
        page = int(digits or "0")
        # Pages are 1-based; "page 0" never points at anything
        if page > 0:
            yield page


def extract_page_citations(text: str) -> list[int]:
    """Extract the distinct pages cited in a piece of text.

    Matching is case-insensitive. No upper bound is applied, callers that
    know the document length decide what to do with out-of-range pages.

    Args:
        text: The assistant's answer.

    Returns:
        Page numbers, each once, in first-seen order. Empty if none found.
    """
    return list(dict.fromkeys(iter_page_references(text)))
