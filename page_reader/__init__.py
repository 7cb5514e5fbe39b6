"""
Page Reader - readable article extraction for web pages.

This package fetches a URL (or takes literal markup), normalizes its
charset, and exposes the article title, body markup and plain text through
a Readable.

Example:
    >>> readable, response = read_sync("https://example.com/story")
    >>> readable.title
    >>> readable.close()
"""

__all__ = [
    "__version__",
    "AppConfig",
    "load_config",
    "read",
    "read_sync",
    "Readable",
    "ReaderError",
    "FetchError",
    "ConversionError",
    "ParseError",
    "StructuralError",
    "EmptyResultError",
    "ResourceReleasedError",
]
__version__ = "0.1.0"

from .config import AppConfig, load_config
from .errors import (
    ConversionError,
    EmptyResultError,
    FetchError,
    ParseError,
    ReaderError,
    ResourceReleasedError,
    StructuralError,
)
from .readable import Readable
from .runner import read, read_sync
