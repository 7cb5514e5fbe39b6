"""
The readable view of a parsed document.

A Readable owns one DocumentHandle. On construction it sanitizes the
document, snapshots the body markup and collects metadata; afterwards it
answers artifact queries (content, title, text_body, html, document) until
``close()`` releases the document.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Iterable, Optional

from bs4 import Tag

from .artifacts import BODY_SNAPSHOT, CONTENT, TEXT_BODY, TITLE, ArtifactCache, ArtifactState
from .config import ExtractConfig
from .document import DocumentHandle, inner_text
from .errors import ResourceReleasedError
from .extractor import ContentScorer, SanitizerRule, prepare, summarize
from .logging_utils import get_logger, log_event
from .title import resolve_title
from .types import ArticleMetadata

Scorer = Callable[[DocumentHandle, bool], Optional[Tag]]
Sanitizer = Callable[[DocumentHandle, Iterable[SanitizerRule]], None]
Summarizer = Callable[..., dict]


class ReadableState(enum.Enum):
    CONSTRUCTED = "constructed"
    READY = "ready"
    CLOSED = "closed"


class Readable:
    """Article artifacts computed lazily from a document.

    ``content`` may replace the live body with the snapshot taken at
    construction when the first scoring pass comes back empty. Read
    ``html`` or ``document`` before ``content`` if you need the untouched
    sanitized tree.

    Attributes:
        metadata: Fields reported by the summarizer
        state: Lifecycle state
    """

    def __init__(
        self,
        document: DocumentHandle,
        cfg: ExtractConfig | None = None,
        logger: logging.Logger | None = None,
        *,
        sanitizer_rules: Iterable[SanitizerRule] | None = None,
        scorer: Scorer | None = None,
        sanitizer: Sanitizer | None = None,
        summarizer: Summarizer | None = None,
    ):
        self._document: DocumentHandle | None = document
        self.cfg = cfg or ExtractConfig()
        self.logger = get_logger(logger)
        self._scorer = scorer or ContentScorer(self.cfg, self.logger)
        self._sanitizer = sanitizer or prepare
        self._summarizer = summarizer or summarize
        self._cache = ArtifactCache()
        self._candidate: Tag | None = None
        self.metadata = ArticleMetadata()
        self.state = ReadableState.CONSTRUCTED

        rules = list(self.cfg.sanitizer_rules)
        if sanitizer_rules:
            rules.extend(sanitizer_rules)
        self._prepare(rules)

    def _prepare(self, rules: list[SanitizerRule]) -> None:
        document = self._handle()
        original_markup = document.html_markup()

        self._sanitizer(document, rules)
        self._cache.set(BODY_SNAPSHOT, document.body_markup())

        self.metadata = ArticleMetadata.from_mapping(self._summarizer(original_markup, document.url))
        self.state = ReadableState.READY
        self.logger.debug("Document ready (url=%s, rules=%d)", document.url, len(rules))

    def _handle(self) -> DocumentHandle:
        if self._document is None:
            raise ResourceReleasedError("document")
        return self._document

    @property
    def closed(self) -> bool:
        return self.state is ReadableState.CLOSED

    @property
    def original_url(self) -> str | None:
        return self._handle().url

    @property
    def document(self) -> DocumentHandle:
        """The live document handle."""
        return self._handle()

    @property
    def html(self) -> str:
        """Current serialization of the document, reflecting any mutation."""
        return self._handle().html_markup()

    @property
    def content(self) -> str | bool:
        """Inner markup of the article body, or False when none was found."""
        return self._extract_content(self._handle())

    def _extract_content(self, document: DocumentHandle) -> str | bool:
        cached = self._cache.get(CONTENT)
        if cached.state is ArtifactState.COMPUTED:
            return cached.value
        if cached.state is ArtifactState.COMPUTED_EMPTY:
            return False

        candidate = self._scorer(document, False)
        if not inner_text(candidate, normalize_spaces=False):
            log_event(self.logger, "content_relaxed_retry", url=document.url)
            document.replace_body(self._cache.get(BODY_SNAPSHOT).value)
            candidate = self._scorer(document, True)

        self._candidate = candidate
        if not inner_text(candidate, normalize_spaces=False):
            log_event(self.logger, "content_empty", url=document.url)
            self._cache.set_empty(CONTENT)
            return False

        return self._cache.set(CONTENT, candidate.decode_contents()).value

    @property
    def title(self) -> str:
        document = self._handle()
        cached = self._cache.get(TITLE)
        if cached.computed:
            return cached.value
        return self._cache.set(TITLE, resolve_title(document)).value

    @property
    def text_body(self) -> str:
        """Plain text of the article, one line per top-level block."""
        document = self._handle()
        cached = self._cache.get(TEXT_BODY)
        if cached.computed:
            return cached.value

        self._extract_content(document)

        texts = []
        # the candidate wraps every block readability kept, siblings included
        if self._candidate is not None:
            for child in self._candidate.children:
                text = inner_text(child)
                if text:
                    texts.append(text)

        return self._cache.set(TEXT_BODY, "\n".join(texts)).value

    def close(self) -> None:
        """Release the document. Safe to call more than once."""
        if self._document is None:
            return
        url = self._document.url
        self._document.close()
        self._document = None
        self._candidate = None
        self._cache.clear()
        self.state = ReadableState.CLOSED
        log_event(self.logger, "document_closed", url=url)

    def __enter__(self) -> Readable:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Readable state={self.state.value} url={self._document.url if self._document else None!r}>"
