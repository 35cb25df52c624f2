"""Streaming page/stream fetch with optional proxy and progress reporting."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import quote

import requests

from vidcarve.exceptions import NetworkError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 64


@dataclass
class FetchProgress:
    """Progress after one received chunk."""

    downloaded_bytes: int
    total_bytes: int  # 0 when the server sent no Content-Length
    chunk_size: int

    @property
    def percent(self) -> float | None:
        if not self.total_bytes:
            return None
        return self.downloaded_bytes / self.total_bytes * 100


def build_proxy_url(url: str, proxy_url: str) -> str:
    """Append the percent-encoded target URL to a proxy prefix."""
    return proxy_url + quote(url, safe="")


def fetch_bytes(
    url: str,
    *,
    via_proxy: bool = False,
    proxy_url: str | None = None,
    on_progress: Callable[[FetchProgress], None] | None = None,
    on_content_length: Callable[[int], None] | None = None,
    abort_event: threading.Event | None = None,
    handle_error: Callable[[NetworkError], None] | None = None,
    timeout: float | None = None,
    session: requests.Session | None = None,
) -> bytes | None:
    """Download ``url`` into memory, chunk by chunk.

    Args:
        url: Target URL.
        via_proxy: Route the request through ``proxy_url``.
        proxy_url: Proxy prefix, e.g. "https://proxy.example/fetch?url=".
        on_progress: Called after every chunk.
        on_content_length: Called once with the Content-Length (0 if absent).
        abort_event: Checked between chunks; when set the fetch is aborted.
        handle_error: If given, receives the error and None is returned
            instead of raising.
        timeout: Request timeout in seconds.
        session: Optional requests session to reuse.

    Returns:
        The response body, or None if an error was handed to handle_error.

    Raises:
        NetworkError: On invalid input, HTTP errors, transport errors or abort,
            unless handle_error is given.
    """
    try:
        return _fetch(
            url,
            via_proxy=via_proxy,
            proxy_url=proxy_url,
            on_progress=on_progress,
            on_content_length=on_content_length,
            abort_event=abort_event,
            timeout=timeout,
            session=session,
        )
    except NetworkError as e:
        if handle_error is None:
            raise
        logger.debug(f"Fetch error handed to caller: {e.message}")
        handle_error(e)
        return None


def _fetch(
    url: str,
    *,
    via_proxy: bool,
    proxy_url: str | None,
    on_progress: Callable[[FetchProgress], None] | None,
    on_content_length: Callable[[int], None] | None,
    abort_event: threading.Event | None,
    timeout: float | None,
    session: requests.Session | None,
) -> bytes:
    if not isinstance(url, str) or not url:
        raise NetworkError("Invalid URL or data is not passed", category="invalid_url")

    target = url
    if via_proxy:
        if not proxy_url:
            raise NetworkError(
                "Proxy requested but no proxy_url configured",
                url=url,
                category="invalid_url",
            )
        target = build_proxy_url(url, proxy_url)

    if abort_event is not None and abort_event.is_set():
        raise NetworkError("Fetch aborted", url=url, category="aborted")

    get = session.get if session is not None else requests.get
    try:
        with get(target, stream=True, timeout=timeout) as r:
            if not r.ok:
                raise NetworkError(
                    f"Error {r.status_code} - {r.reason}",
                    url=url,
                    http_code=r.status_code,
                )

            total = _content_length(r.headers)
            if on_content_length is not None:
                on_content_length(total)

            buffer = bytearray()
            for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                if abort_event is not None and abort_event.is_set():
                    raise NetworkError("Fetch aborted", url=url, category="aborted")
                if not chunk:
                    continue
                buffer.extend(chunk)
                if on_progress is not None:
                    on_progress(FetchProgress(len(buffer), total, len(chunk)))
    except requests.RequestException as e:
        raise NetworkError(f"Request failed: {e}", url=url) from e

    logger.debug(f"Fetched {len(buffer)} bytes from {url}")
    return bytes(buffer)


def _content_length(headers) -> int:
    """Content-Length as an int; 0 when absent, malformed or negative."""
    value = headers.get("content-length")
    if not value:
        return 0
    try:
        total = int(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring malformed Content-Length {value!r}")
        return 0
    return max(total, 0)


def decode_payload(data: bytes, encoding: str = "utf-8") -> str:
    """Decode a fetched payload to text for extraction."""
    return data.decode(encoding, errors="replace")
