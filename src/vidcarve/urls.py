"""
CDN URL rewriting for proxy playback.

Facebook stream URLs carry a per-request host segment between ``video`` and
``.fbcdn`` (e.g. ``video-fra3-1.xx.fbcdn.net``). Replacing that segment with a
fixed placeholder keeps the URL fetchable through a generic proxy.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "video"
DEFAULT_DOMAIN = ".fbcdn"
DEFAULT_PLACEHOLDER = ".xx"


class UrlRewriter:
    """Rewrite the host span between a marker and a CDN domain.

    Example:
        >>> UrlRewriter().rewrite("https://video-a.fbcdn.net/x")
        'https://video.xx.fbcdn.net/x'
    """

    def __init__(
        self,
        marker: str = DEFAULT_MARKER,
        domain: str = DEFAULT_DOMAIN,
        placeholder: str = DEFAULT_PLACEHOLDER,
    ):
        self.marker = marker
        self.domain = domain
        self.placeholder = placeholder
        self._pattern = re.compile(
            rf"(?<={re.escape(marker)})(.*?)(?={re.escape(domain)})", re.DOTALL
        )

    def rewrite(self, url: str) -> str:
        """Rewrite the first marker..domain span; unmatched URLs pass through."""
        rewritten = self._pattern.sub(lambda _: self.placeholder, url, count=1)
        if rewritten != url:
            logger.debug(f"Rewrote {url} -> {rewritten}")
        return rewritten

    def __call__(self, url: str) -> str:
        return self.rewrite(url)


_default_rewriter = UrlRewriter()


def rewrite_url(url: str) -> str:
    """Rewrite a URL with the default fbcdn settings."""
    return _default_rewriter.rewrite(url)
