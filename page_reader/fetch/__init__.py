"""
Resource retrieval and charset normalization.

This package resolves a target into raw bytes and turns those bytes into
UTF-8 text.
"""

from .charset import convert, find_html_charset, normalize, parse_content_type, resolve_charset
from .fetcher import FETCHABLE_SCHEMES, fetch_resource, is_fetchable

__all__ = [
    "FETCHABLE_SCHEMES",
    "fetch_resource",
    "is_fetchable",
    "convert",
    "find_html_charset",
    "normalize",
    "parse_content_type",
    "resolve_charset",
]
