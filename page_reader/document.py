"""
Document construction and ownership.

Markup is parsed with BeautifulSoup on the lxml tree builder. The resulting
tree is owned by a DocumentHandle, which is released exactly once.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PageElement
from lxml.etree import LxmlError

from .errors import ParseError, ResourceReleasedError, StructuralError

PARSER = "lxml"


class DocumentHandle:
    """A parsed document and the URL it came from.

    Attributes:
        url: Final URL of the fetched resource, None for literal markup
    """

    def __init__(self, soup: BeautifulSoup, url: str | None = None):
        self._soup: BeautifulSoup | None = soup
        self.url = url

    @property
    def closed(self) -> bool:
        return self._soup is None

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            raise ResourceReleasedError("document")
        return self._soup

    @property
    def body(self) -> Tag:
        body = self.soup.body
        if body is None:
            raise StructuralError("No body tag was found.")
        return body

    @property
    def title(self) -> str:
        """Text of the <title> element with whitespace collapsed."""
        title = self.soup.title
        if title is None:
            return ""
        return " ".join(title.get_text().split())

    def body_markup(self) -> str:
        return self.body.decode_contents()

    def html_markup(self) -> str:
        """Serialization of everything inside the <html> element."""
        root = self.soup.html
        if root is None:
            return self.soup.decode()
        return root.decode_contents()

    def markup(self) -> str:
        return self.soup.decode()

    def replace_body(self, markup: str) -> None:
        """Replace the children of <body> with freshly parsed markup."""
        fragment = BeautifulSoup(f"<body>{markup}</body>", PARSER).body
        body = self.body
        body.clear()
        if fragment is None:
            return
        for child in list(fragment.contents):
            body.append(child.extract())

    def close(self) -> None:
        if self._soup is not None:
            self._soup.decompose()
        self._soup = None


def build_document(text: str, url: str | None = None) -> DocumentHandle:
    """Parse markup into a DocumentHandle.

    Raises:
        ParseError: The parser rejected the markup
        StructuralError: The document has no <body>
    """
    try:
        soup = BeautifulSoup(text, PARSER)
    except (ParserRejectedMarkup, LxmlError) as exc:
        raise ParseError(f"Unable to parse markup: {exc}", {"url": url}) from exc

    if soup.body is None:
        soup.decompose()
        raise StructuralError("No body tag was found.", {"url": url})

    return DocumentHandle(soup, url)


def inner_text(node: PageElement | None, normalize_spaces: bool = True) -> str:
    """Visible text of a node, trimmed.

    With ``normalize_spaces`` runs of whitespace collapse to a single space.
    """
    if node is None:
        return ""
    if isinstance(node, NavigableString):
        text = str(node) if type(node) is NavigableString else ""
    else:
        text = node.get_text()
    text = text.strip()
    if normalize_spaces:
        text = " ".join(text.split())
    return text


def first_element(node: Tag | None) -> Tag | None:
    """First child element of a node, skipping text and comments."""
    if node is None:
        return None
    return node.find(True, recursive=False)
