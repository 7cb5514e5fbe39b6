"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: transport retrieval and charset override settings
- ExtractConfig: sanitizer rules and content scoring settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import yaml


@dataclass
class FetchConfig:
    """Configuration for transport retrieval.

    Attributes:
        timeout_seconds: Request timeout
        retries: Connection retry attempts handed to the httpx transport
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
        headers: Extra request headers
        proxy: Explicit proxy URL, overrides environment proxies
        raise_for_status: Raise FetchError on 4xx/5xx responses instead of
            parsing the error page
        max_redirects: Maximum number of redirects to follow
        encoding: Charset override; wins over every declared charset
    """

    timeout_seconds: float = 20.0
    retries: int = 0
    trust_env: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    headers: dict[str, str] = field(default_factory=dict)
    proxy: str | None = None
    raise_for_status: bool = True
    max_redirects: int = 20
    encoding: str | None = None


@dataclass
class ExtractConfig:
    """Configuration for document preparation and content scoring.

    Attributes:
        sanitizer_rules: Extra CSS selectors whose matches are stripped
            before extraction, on top of the built-in list
        min_text_length: Shortest paragraph the scorer considers in the
            primary pass
        retry_length: Article length under which the scorer retries
            without its ruthless candidate filter
        positive_keywords: Class/id keywords that boost a candidate
        negative_keywords: Class/id keywords that penalise a candidate
    """

    sanitizer_rules: list[str] = field(default_factory=list)
    min_text_length: int = 25
    retry_length: int = 250
    positive_keywords: list[str] = field(default_factory=list)
    negative_keywords: list[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "WARNING"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "page_reader.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        fetch=FetchConfig(**data["fetch"]),
        extract=ExtractConfig(**data["extract"]),
        logging=LoggingConfig(**data["logging"]),
    )
