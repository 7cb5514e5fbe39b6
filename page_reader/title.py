"""Best-guess article title from social meta tags or the document title."""

from __future__ import annotations

from bs4 import BeautifulSoup

from .document import DocumentHandle

SEPARATORS = (" | ", " _ ", " - ", "«", "»", "—")
MIN_REFINED_LENGTH = 10


def find_meta_title(soup: BeautifulSoup) -> str | None:
    """Content of the first og:title or twitter:title meta tag."""
    for tag in soup.find_all("meta"):
        if tag.get("property") == "og:title" or tag.get("name") == "twitter:title":
            return tag.get("content")
    return None


def refine_title(title: str) -> str:
    """Drop a site-name suffix from a title.

    The part before the first separator is kept when it is longer than
    ``MIN_REFINED_LENGTH`` characters. A title that splits on two different
    separators is ambiguous and returned unchanged.

    Examples:
        >>> refine_title("Great Article | My Site")
        'Great Article'
        >>> refine_title("A | B")
        'A | B'
    """
    better = None
    for separator in SEPARATORS:
        parts = title.split(separator)
        if len(parts) > 1:
            if better:
                return title
            better = parts[0].strip()

    if better and len(better) > MIN_REFINED_LENGTH:
        return better
    return title


def resolve_title(handle: DocumentHandle) -> str:
    title = find_meta_title(handle.soup) or handle.title
    return refine_title(title)
