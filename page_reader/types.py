"""
Core data types for the page reader pipeline.

This module defines the plain data structures passed between stages:
- ContentTypeInfo: mime type and charset parsed from a Content-Type header
- FetchResult: raw bytes and response metadata from a transport retrieval
- ArticleMetadata: fields reported by the metadata summarizer
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any


@dataclass
class ContentTypeInfo:
    """Parsed Content-Type header.

    Attributes:
        mime_type: Lower-cased mime type, empty when the header was absent
        charset: Lower-cased charset name, "utf-8" when unspecified
    """
    mime_type: str = ""
    charset: str = "utf-8"


@dataclass
class FetchResult:
    """Result of a transport retrieval.

    The body is kept as raw bytes; decoding happens once, in the charset
    normalizer, after the charset has been resolved.

    Attributes:
        url: The target that was requested
        final_url: URL after following redirects
        status_code: HTTP status code of the final response
        headers: Response headers with lower-cased names
        content: Undecoded response body
    """
    url: str
    final_url: str
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes = b""

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")


@dataclass
class ArticleMetadata:
    """Document metadata reported by the summarizer.

    Recognised fields get their own attribute; anything else the summarizer
    returns lands in ``extra``.
    """
    title: str | None = None
    author: str | None = None
    date: str | None = None
    description: str | None = None
    sitename: str | None = None
    hostname: str | None = None
    url: str | None = None
    image: str | None = None
    language: str | None = None
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> ArticleMetadata:
        """Build metadata from a free-form mapping, dropping empty values."""
        known = {f.name for f in fields(cls)} - {"extra"}
        meta = cls()
        for key, value in data.items():
            if value is None or value == "" or value == []:
                continue
            if key in known:
                setattr(meta, key, list(value) if isinstance(value, (list, tuple)) else value)
            else:
                meta.extra[key] = value
        return meta

    def as_dict(self) -> dict[str, Any]:
        payload = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        payload.update(self.extra)
        return payload
