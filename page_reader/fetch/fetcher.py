"""
Resource fetching over httpx.

A target is either a URL with a fetchable scheme, which is retrieved in
binary mode, or a literal markup string, which is returned untouched with
no I/O. Unix socket targets use the ``unix:<socket path>:<request path>``
form.
"""

from __future__ import annotations

import logging
import re

import httpx

from ..config import FetchConfig
from ..errors import FetchError
from ..logging_utils import log_event
from ..types import FetchResult

FETCHABLE_SCHEMES = frozenset({"http", "https", "unix", "ftp", "sftp"})

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")


def target_scheme(target: str) -> str | None:
    """Return the lower-cased URL scheme of a target, if it has one."""
    match = _SCHEME_RE.match(target.strip())
    if not match:
        return None
    return match.group(1).lower()


def is_fetchable(target: str) -> bool:
    """Whether a target names a remote resource rather than literal markup."""
    return target_scheme(target) in FETCHABLE_SCHEMES


def split_unix_target(target: str) -> tuple[str, str]:
    """Split ``unix:/path/to.sock:/request/path`` into socket and request path."""
    rest = target.strip()[len("unix:"):]
    if rest.startswith("//"):
        rest = rest[2:]
    socket_path, _, request_path = rest.partition(":")
    if not request_path.startswith("/"):
        request_path = "/" + request_path
    return socket_path, request_path


async def fetch_resource(
    target: str,
    cfg: FetchConfig,
    logger: logging.Logger | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FetchResult | None:
    """Retrieve a target's raw bytes.

    Args:
        target: URL or literal markup
        cfg: Transport settings
        logger: Logger for fetch events
        transport: Optional httpx transport replacing the default one

    Returns:
        FetchResult for fetchable targets, None for literal markup

    Raises:
        FetchError: Transport failure, or an error status when
            ``cfg.raise_for_status`` is set
    """
    scheme = target_scheme(target)
    if scheme not in FETCHABLE_SCHEMES:
        return None

    url = target.strip()
    uds = None
    if scheme == "unix":
        uds, request_path = split_unix_target(url)
        url = f"http://localhost{request_path}"

    log_event(logger, "fetch_start", url=target, scheme=scheme)
    try:
        async with _build_client(cfg, transport=transport, uds=uds) as client:
            resp = await client.get(url)
            content = resp.content
    except httpx.HTTPError as exc:
        log_event(logger, "fetch_failed", url=target, error=f"{type(exc).__name__}: {exc}")
        raise FetchError(f"Failed to fetch {target}", url=target, cause=exc) from exc

    if cfg.raise_for_status and resp.status_code >= 400:
        log_event(logger, "fetch_failed", url=target, status_code=resp.status_code)
        raise FetchError(
            f"Server returned HTTP {resp.status_code} for {target}",
            url=target,
            status_code=resp.status_code,
        )

    result = FetchResult(
        url=target,
        final_url=target if uds else str(resp.url),
        status_code=resp.status_code,
        headers={key.lower(): value for key, value in resp.headers.items()},
        content=content,
    )
    log_event(
        logger,
        "fetch_done",
        url=target,
        final_url=result.final_url,
        status_code=result.status_code,
        bytes=len(content),
    )
    return result


def _build_client(
    cfg: FetchConfig,
    transport: httpx.AsyncBaseTransport | None = None,
    uds: str | None = None,
) -> httpx.AsyncClient:
    headers = {"User-Agent": cfg.user_agent}
    headers.update(cfg.headers)

    if transport is None:
        transport = httpx.AsyncHTTPTransport(retries=cfg.retries, uds=uds, trust_env=cfg.trust_env)

    return httpx.AsyncClient(
        timeout=cfg.timeout_seconds,
        headers=headers,
        follow_redirects=True,
        max_redirects=cfg.max_redirects,
        trust_env=cfg.trust_env and uds is None,
        proxy=None if uds else cfg.proxy,
        transport=transport,
    )
