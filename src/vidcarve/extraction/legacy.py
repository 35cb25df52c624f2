"""
Legacy extraction from the embedded DASH manifest text.

Older pages ship no prefetch schema. Instead they embed an escaped MPD
manifest string and list the video/audio representation ids in
``"dash_prefetch_experimental":["<n>v","<n>a"]``.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from vidcarve.events import FAILED, SKIPPED, SUCCESS, Observer, emit
from vidcarve.exceptions import ExtractionError
from vidcarve.extraction.thumbnails import resolve_thumbnail
from vidcarve.models import Resolution, VideoEntry
from vidcarve.parsing.cleaner import TextCleaner
from vidcarve.urls import rewrite_url

_IDS_RE = re.compile(r'"dash_prefetch_experimental":\[\s*"(\d+v)",\s*"(\d+a)"\s*\]')

_VIDEO_REPRESENTATION_RE = re.compile(
    r'<Representation\s+[^>]*id="(\d+v)"[^>]*FBQualityClass="([^"]+)"'
    r'[^>]*FBQualityLabel="([^"]+)"[^>]*>[\s\S]*?<BaseURL>(https://[^<]+)</BaseURL>'
)

_AUDIO_REPRESENTATION_RE = re.compile(
    r'<Representation\s+[^>]*id="(\d+a)"[^>]*mimeType="audio/mp4"[^>]*>'
    r"[\s\S]*?<BaseURL>(https://[^<]+)</BaseURL>"
)


@dataclass(frozen=True)
class ManifestIds:
    """Representation ids announced by the page."""

    video_id: str
    audio_id: str


@dataclass(frozen=True)
class ManifestRepresentation:
    """One video representation carved out of the manifest."""

    representation_id: str
    quality_class: str
    quality_label: str
    url: str


def find_manifest_ids(text: str) -> ManifestIds:
    """Find the announced video/audio representation ids.

    Raises:
        ExtractionError: If the id list is absent.
    """
    match = _IDS_RE.search(text)
    if not match:
        raise ExtractionError("No dash_prefetch_experimental ids found", strategy="legacy")
    return ManifestIds(video_id=match.group(1), audio_id=match.group(2))


def find_video_representations(cleaned: str) -> list[ManifestRepresentation]:
    """All video representations in document order."""
    return [
        ManifestRepresentation(
            representation_id=m.group(1),
            quality_class=m.group(2),
            quality_label=m.group(3),
            url=m.group(4),
        )
        for m in _VIDEO_REPRESENTATION_RE.finditer(cleaned)
    ]


def find_audio_url(cleaned: str, audio_id: str) -> str | None:
    """URL of the first audio representation whose id matches ``audio_id``."""
    for m in _AUDIO_REPRESENTATION_RE.finditer(cleaned):
        if m.group(1) == audio_id:
            return m.group(2)
    return None


def assign_keys(reps: list[ManifestRepresentation]) -> list[str]:
    """Use the representation id as key unless it repeats in this result."""
    counts = Counter(rep.representation_id for rep in reps)
    return [
        rep.representation_id
        if counts[rep.representation_id] == 1
        else f"{rep.quality_class}_{rep.quality_label}_{i}"
        for i, rep in enumerate(reps)
    ]


def extract_legacy(
    html: str,
    trash_words: Iterable[str] = (),
    *,
    rewriter: Callable[[str], str] = rewrite_url,
    observer: Observer | None = None,
) -> list[VideoEntry]:
    """Extract a single video from the embedded manifest text.

    Args:
        html: Raw page text.
        trash_words: Substrings stripped from the text after un-escaping.
        rewriter: URL rewriter applied to every emitted URL.
        observer: Optional diagnostic observer.

    Returns:
        A one-element list with all resolutions found.

    Raises:
        ExtractionError: If the ids or the video representations are missing.
    """
    try:
        ids = find_manifest_ids(html)
    except ExtractionError as e:
        emit(observer, "legacy", FAILED, e.message)
        raise

    cleaned = TextCleaner(html).clean(trash_words).value

    reps = find_video_representations(cleaned)
    if not reps:
        emit(observer, "legacy", FAILED, "No video representations found in legacy method")
        raise ExtractionError(
            "No video representations found in legacy method",
            strategy="legacy",
            details={"video_id": ids.video_id},
        )

    audio_url = find_audio_url(cleaned, ids.audio_id)
    if audio_url is None:
        emit(observer, "legacy", SKIPPED, f"No audio representation for {ids.audio_id}")

    resolutions = [
        Resolution(
            quality_class=rep.quality_class,
            quality_label=rep.quality_label,
            url=rewriter(rep.url),
            key=key,
        )
        for rep, key in zip(reps, assign_keys(reps))
    ]

    entry = VideoEntry(
        video_id=ids.video_id,
        key="video_0",
        thumbnail=resolve_thumbnail(html, None, 0, observer=observer),
        audio_url=rewriter(audio_url) if audio_url else None,
        resolutions=resolutions,
    )
    emit(observer, "legacy", SUCCESS,
         f"Extracted {len(resolutions)} resolutions via legacy manifest",
         count=len(resolutions))
    return [entry]
