"""
Charset resolution and conversion of raw response bodies to UTF-8 text.

Resolution precedence:
1. Explicit override
2. HTML meta declaration, only for text/html responses
3. Charset parameter of the Content-Type header
4. "utf-8"
"""

from __future__ import annotations

import logging
import re

from ..errors import ConversionError
from ..types import ContentTypeInfo

DEFAULT_CHARSET = "utf-8"

_HTTP_EQUIV_RE = re.compile(r"<meta\s+http-equiv=[\"']content-type[\"'][^>]*?>", re.IGNORECASE)
_HTTP_EQUIV_CHARSET_RE = re.compile(r"charset\s?=\s?([a-zA-Z\-0-9_:.]*);?", re.IGNORECASE)
_META_CHARSET_RE = re.compile(r"<meta\s+charset=[\"'](.*?)[\"']", re.IGNORECASE)
_UTF8_RE = re.compile(r"^utf-?8$", re.IGNORECASE)


def parse_content_type(header: str | None) -> ContentTypeInfo:
    """Parse a Content-Type header into mime type and charset.

    Args:
        header: Raw header value, e.g. "text/html; charset=ISO-8859-1"

    Returns:
        ContentTypeInfo with lower-cased values; charset defaults to utf-8
    """
    if not header:
        return ContentTypeInfo()

    mime_type, *params = header.split(";")
    charset = None
    for param in params:
        key, sep, value = param.partition("=")
        if sep and key.strip().lower() == "charset":
            charset = value.strip().strip("\"'")

    return ContentTypeInfo(
        mime_type=mime_type.strip().lower(),
        charset=(charset or DEFAULT_CHARSET).strip().lower(),
    )


def find_html_charset(raw: bytes) -> str | None:
    """Scan an HTML buffer for a meta charset declaration.

    The http-equiv form is tried before ``<meta charset>``.
    """
    body = raw.decode("ascii", errors="ignore")
    charset = None

    meta = _HTTP_EQUIV_RE.search(body)
    if meta:
        match = _HTTP_EQUIV_CHARSET_RE.search(meta.group(0))
        if match:
            charset = match.group(1).strip().lower()

    if not charset:
        meta = _META_CHARSET_RE.search(body)
        if meta:
            charset = meta.group(1).strip().lower()

    return charset or None


def resolve_charset(
    raw: bytes,
    content_type_header: str | None,
    override: str | None = None,
) -> ContentTypeInfo:
    """Resolve the charset of a response body."""
    info = parse_content_type(content_type_header)

    if info.mime_type == "text/html":
        info.charset = find_html_charset(raw) or info.charset

    info.charset = (override or info.charset or DEFAULT_CHARSET).strip().lower()
    return info


def is_utf8(charset: str) -> bool:
    return bool(_UTF8_RE.match(charset))


def convert(raw: bytes, from_charset: str, to_charset: str = DEFAULT_CHARSET) -> bytes:
    """Re-encode bytes from one charset to another.

    Raises:
        ConversionError: The charset is unknown or the bytes are not valid in it
    """
    try:
        return raw.decode(from_charset).encode(to_charset)
    except LookupError as exc:
        raise ConversionError(from_charset, exc) from exc
    except UnicodeError as exc:
        raise ConversionError(from_charset, exc) from exc


def normalize(
    raw: bytes,
    content_type_header: str | None,
    override: str | None = None,
    logger: logging.Logger | None = None,
) -> tuple[str, ContentTypeInfo]:
    """Convert a raw body to UTF-8 text.

    Returns:
        The decoded text and the resolved content type
    """
    info = resolve_charset(raw, content_type_header, override)
    if logger is not None:
        logger.debug("Resolved charset %s (mime type %r)", info.charset, info.mime_type)

    if not is_utf8(info.charset):
        raw = convert(raw, info.charset)

    return raw.decode("utf-8", errors="replace"), info
