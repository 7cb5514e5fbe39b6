"""
Pipeline orchestration for reading a single target.

This module wires the stages together:
1. Fetch the target (or take it as literal markup)
2. Resolve the charset and normalize the body to UTF-8 text
3. Run the optional preprocess hook
4. Build the document
5. Hand the document to a Readable

``read`` is a coroutine; cancel the task running it to abort an in-flight
retrieval. ``read_sync`` runs it to completion on a fresh event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Iterable

import httpx

from .config import AppConfig
from .document import build_document
from .errors import EmptyResultError
from .extractor import SanitizerRule
from .fetch.charset import normalize, parse_content_type
from .fetch.fetcher import fetch_resource
from .logging_utils import get_logger, log_event
from .readable import Readable
from .types import ContentTypeInfo, FetchResult

Preprocess = Callable[[str, FetchResult, ContentTypeInfo], Awaitable[str]]

_TEXT_MIME_SUFFIXES = ("+xml",)
_TEXT_MIME_TYPES = frozenset({"application/xhtml+xml", "application/xml"})


def is_textual(mime_type: str) -> bool:
    """Whether a mime type can hold markup. An unknown type is given the benefit of the doubt."""
    if not mime_type:
        return True
    return (
        mime_type.startswith("text/")
        or mime_type in _TEXT_MIME_TYPES
        or mime_type.endswith(_TEXT_MIME_SUFFIXES)
    )


async def read(
    target: str,
    cfg: AppConfig | None = None,
    *,
    preprocess: Preprocess | None = None,
    sanitizer_rules: Iterable[SanitizerRule] | None = None,
    logger: logging.Logger | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[Readable, FetchResult | None]:
    """Read a URL or a literal markup string into a Readable.

    Args:
        target: URL with an http, https, unix, ftp or sftp scheme, or markup
        cfg: Application configuration; defaults apply when omitted
        preprocess: Coroutine rewriting the fetched text before parsing
        sanitizer_rules: Extra CSS selectors or predicates for nodes to strip
        logger: Logger for pipeline events
        transport: Optional httpx transport used for the retrieval

    Returns:
        The Readable and the fetch result (None for literal markup). The
        caller owns the Readable and must close it.

    Raises:
        FetchError, ConversionError, EmptyResultError, ParseError,
        StructuralError
    """
    cfg = cfg or AppConfig()
    logger = get_logger(logger)

    response = await fetch_resource(target, cfg.fetch, logger=logger, transport=transport)
    if response is None:
        text = target
        url = None
    else:
        text = await _normalize_response(response, cfg, preprocess, logger)
        url = response.final_url

    if not text or not text.strip():
        raise EmptyResultError("Empty story body returned from URL", {"url": url})

    document = build_document(text, url)
    try:
        readable = Readable(document, cfg.extract, logger, sanitizer_rules=sanitizer_rules)
    except Exception:
        document.close()
        raise

    log_event(logger, "document_read", url=url, fetched=response is not None)
    return readable, response


async def _normalize_response(
    response: FetchResult,
    cfg: AppConfig,
    preprocess: Preprocess | None,
    logger: logging.Logger,
) -> str:
    if not response.content:
        raise EmptyResultError("Empty story body returned from URL", {"url": response.final_url})

    mime_type = parse_content_type(response.content_type).mime_type
    if not is_textual(mime_type):
        raise EmptyResultError(
            f"Non-text content returned from URL ({mime_type})",
            {"url": response.final_url, "mime_type": mime_type},
        )

    text, content_type = normalize(
        response.content,
        response.content_type,
        override=cfg.fetch.encoding,
        logger=logger,
    )

    if preprocess is not None:
        text = await preprocess(text, response, content_type)
    return text


def read_sync(target: str, cfg: AppConfig | None = None, **kwargs) -> tuple[Readable, FetchResult | None]:
    """Blocking wrapper around :func:`read`."""
    return asyncio.run(read(target, cfg, **kwargs))
