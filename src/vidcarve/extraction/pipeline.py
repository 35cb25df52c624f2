"""
Top-level extraction with a strict two-tier fallback.

The modern schema extractor runs first. Only if it fails does the legacy
manifest extractor run; results are never merged.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable

from vidcarve.config.loader import VidcarveConfig, get_config
from vidcarve.events import FAILED, SUCCESS, Observer, emit
from vidcarve.exceptions import ExtractionError
from vidcarve.extraction.legacy import extract_legacy
from vidcarve.extraction.modern import extract_modern
from vidcarve.models import VideoEntry
from vidcarve.urls import UrlRewriter
from vidcarve.utils.logging import log_timed

Strategy = Callable[[str], list[VideoEntry]]


def build_strategies(
    trash_words: Iterable[str] = (),
    *,
    rewriter: Callable[[str], str] | None = None,
    observer: Observer | None = None,
) -> list[tuple[str, Strategy]]:
    """Return the ordered (name, strategy) list used by extract_videos()."""
    rewriter = rewriter or UrlRewriter()
    trash = tuple(trash_words)
    return [
        ("modern", lambda html: extract_modern(html, rewriter=rewriter, observer=observer)),
        ("legacy", lambda html: extract_legacy(html, trash, rewriter=rewriter, observer=observer)),
    ]


def run_strategies(
    html: str,
    strategies: list[tuple[str, Strategy]],
    observer: Observer | None = None,
) -> list[VideoEntry]:
    """Apply strategies in order and return the first non-empty result.

    Raises:
        ExtractionError: Aggregating every strategy's failure message.
    """
    failures: dict[str, str] = {}
    for name, strategy in strategies:
        try:
            videos = strategy(html)
        except ExtractionError as e:
            failures[name] = e.message
            emit(observer, "pipeline", FAILED,
                 f"{name} extraction failed: {e.message}", strategy=name)
            continue
        if videos:
            emit(observer, "pipeline", SUCCESS,
                 f"{name} extraction returned {len(videos)} videos", strategy=name)
            return videos
        failures[name] = "no videos returned"
        emit(observer, "pipeline", FAILED, f"{name} extraction returned no videos",
             strategy=name)

    summary = "; ".join(f"{name}: {msg}" for name, msg in failures.items())
    raise ExtractionError(f"Video extraction failed ({summary})", details=failures)


def extract_videos(
    html: str,
    trash_words: Iterable[str] | None = None,
    *,
    observer: Observer | None = None,
    config: VidcarveConfig | None = None,
) -> list[VideoEntry]:
    """Extract every downloadable video from a page.

    Args:
        html: Raw page text (HTML or JSON).
        trash_words: Substrings stripped during legacy cleaning. Defaults to
            the configured trash words.
        observer: Optional diagnostic observer.
        config: Configuration; the resolved get_config() when omitted.

    Returns:
        Non-empty, ordered list of VideoEntry.

    Raises:
        ExtractionError: If both the modern and legacy extractors fail.
    """
    start = time.time()
    config = config or get_config()
    if trash_words is None:
        trash_words = config.trash_words

    strategies = build_strategies(
        trash_words,
        rewriter=UrlRewriter(placeholder=config.url_placeholder),
        observer=observer,
    )
    videos = run_strategies(html, strategies, observer=observer)
    log_timed(f"Extracted {len(videos)} videos", start)
    return videos
