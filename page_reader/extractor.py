"""
Adapters around the third-party extraction libraries.

The orchestrator talks to three capabilities through this module:
1. prepare: strip non-content nodes from the document (BeautifulSoup)
2. ContentScorer: pick the article body (readability-lxml)
3. summarize: collect document metadata (trafilatura)
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Iterable, Union

from bs4 import BeautifulSoup, Comment, Tag
import trafilatura
from readability import Document
from readability.readability import Unparseable

from .config import ExtractConfig
from .document import PARSER, DocumentHandle, first_element

SanitizerRule = Union[str, Callable[[Tag], bool]]

STRIP_TAGS = ("script", "style", "noscript", "template", "link")

# trafilatura fields holding extracted text or trees rather than metadata
_CONTENT_FIELDS = frozenset({"body", "commentsbody", "raw_text", "text", "comments", "fingerprint", "id"})


def prepare(handle: DocumentHandle, extra_rules: Iterable[SanitizerRule] = ()) -> None:
    """Strip non-content nodes from the document in place.

    Rules are CSS selectors or predicates on a tag; matching tags are removed
    along with their subtree.

    Args:
        handle: Document to clean
        extra_rules: Caller-supplied rules applied after the built-in list
    """
    soup = handle.soup
    _decompose_all(soup(list(STRIP_TAGS)))
    for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
        comment.extract()

    for rule in extra_rules:
        if callable(rule):
            matches = [tag for tag in soup.find_all(True) if rule(tag)]
        else:
            matches = soup.select(rule)
        _decompose_all(matches)


def _decompose_all(tags: Iterable[Tag]) -> None:
    for tag in tags:
        # nested matches go away with their ancestor
        if not tag.decomposed:
            tag.decompose()


class ContentScorer:
    """Selects the article body of a document with readability-lxml.

    The primary pass uses the configured thresholds. The relaxed pass scores
    every paragraph regardless of length and skips the ruthless candidate
    filter, accepting lower-confidence candidates.
    """

    def __init__(self, cfg: ExtractConfig | None = None, logger: logging.Logger | None = None):
        self.cfg = cfg or ExtractConfig()
        self.logger = logger or logging.getLogger(__name__)

    def __call__(self, handle: DocumentHandle, relaxed: bool = False) -> Tag | None:
        """Return the candidate root element, or None when nothing was found."""
        options: dict[str, Any] = {
            "url": handle.url,
            "positive_keywords": self.cfg.positive_keywords or None,
            "negative_keywords": self.cfg.negative_keywords or None,
        }
        if relaxed:
            options.update(min_text_length=0, retry_length=sys.maxsize)
        else:
            options.update(min_text_length=self.cfg.min_text_length, retry_length=self.cfg.retry_length)

        try:
            summary = Document(handle.markup(), **options).summary(html_partial=True)
        except Unparseable as exc:
            self.logger.warning("Content scoring failed (relaxed=%s): %s", relaxed, exc)
            return None
        return _candidate_from_summary(summary)


def _candidate_from_summary(summary: str) -> Tag | None:
    if not summary or not summary.strip():
        return None
    body = BeautifulSoup(summary, PARSER).body
    if body is None:
        return None
    # readability falls back to the whole <body> when it finds no candidate
    if summary.lstrip()[:5].lower() in ("<html", "<body"):
        return body
    return first_element(body)


def summarize(markup: str, url: str | None = None) -> dict[str, Any]:
    """Collect document metadata with trafilatura.

    Returns:
        Mapping of field name to value; text bodies and parsed trees are left out
    """
    metadata = trafilatura.extract_metadata(markup, default_url=url)
    if metadata is None:
        return {}
    data = metadata.as_dict()
    return {
        key: value
        for key, value in data.items()
        if key not in _CONTENT_FIELDS and isinstance(value, (str, int, float, list))
    }
