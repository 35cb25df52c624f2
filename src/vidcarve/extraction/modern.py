"""
Extraction from the "dash prefetch representations" schema.

Each entry of ``extensions.all_video_dash_prefetch_representations`` is one
video. Its ``representations`` list mixes video and audio variants; the
lowest-bandwidth video becomes SD and the highest becomes HD.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from vidcarve.events import FAILED, SKIPPED, SUCCESS, Observer, emit
from vidcarve.exceptions import ExtractionError
from vidcarve.extraction.thumbnails import resolve_thumbnail
from vidcarve.models import RawRepresentation, Resolution, VideoEntry
from vidcarve.parsing.json_locator import REPRESENTATIONS_KEY, locate_embedded_json
from vidcarve.parsing.paths import dig, dig_list
from vidcarve.urls import rewrite_url


def partition_representations(
    representations: list[Any],
) -> tuple[list[RawRepresentation], list[RawRepresentation]]:
    """Split raw representation dicts into (video, audio) candidates.

    Entries that don't validate (no base_url, bad bandwidth) are dropped.
    Input order is preserved within each list.
    """
    videos: list[RawRepresentation] = []
    audios: list[RawRepresentation] = []
    for raw in representations:
        try:
            rep = RawRepresentation.model_validate(raw)
        except ValidationError:
            continue
        if rep.is_video:
            videos.append(rep)
        elif rep.is_audio:
            audios.append(rep)
    return videos, audios


def build_entry(
    index: int,
    videos: list[RawRepresentation],
    audios: list[RawRepresentation],
    thumbnail: str | None,
    rewriter: Callable[[str], str] = rewrite_url,
) -> VideoEntry:
    """Build the VideoEntry for group ``index`` from non-empty video candidates."""
    ordered = sorted(videos, key=lambda rep: rep.bandwidth)
    sd, hd = ordered[0], ordered[-1]
    video_id = f"video_{index}"
    return VideoEntry(
        video_id=video_id,
        key=video_id,
        thumbnail=thumbnail,
        audio_url=rewriter(audios[0].base_url) if audios else None,
        resolutions=[
            Resolution(
                quality_class="sd",
                quality_label="SD",
                url=rewriter(sd.base_url),
                key=f"{video_id}_sd",
            ),
            Resolution(
                quality_class="hd",
                quality_label="HD",
                url=rewriter(hd.base_url),
                key=f"{video_id}_hd",
            ),
        ],
    )


def extract_modern(
    html: str,
    *,
    rewriter: Callable[[str], str] = rewrite_url,
    observer: Observer | None = None,
) -> list[VideoEntry]:
    """Extract all videos from the prefetch representations schema.

    Args:
        html: Raw page text.
        rewriter: URL rewriter applied to every emitted URL.
        observer: Optional diagnostic observer.

    Returns:
        Non-empty list of VideoEntry in representation-group order.

    Raises:
        ExtractionError: If the schema is missing, the list is empty, or no
            group has a video representation.
    """
    data = locate_embedded_json(html, observer=observer)

    groups = dig(data, "extensions", REPRESENTATIONS_KEY)
    if not isinstance(groups, list) or not groups:
        emit(observer, "modern", FAILED, "No video representations found in the data")
        raise ExtractionError(
            "No video representations found in the data", strategy="modern"
        )

    entries: list[VideoEntry] = []
    for i, group in enumerate(groups):
        videos, audios = partition_representations(dig_list(group, "representations"))
        if not videos:
            emit(observer, "modern", SKIPPED, f"Group {i} has no video/mp4 representation",
                 index=i)
            continue
        thumbnail = resolve_thumbnail(html, data, i, observer=observer)
        entries.append(build_entry(i, videos, audios, thumbnail, rewriter))

    if not entries:
        emit(observer, "modern", FAILED, "No videos found in representation groups",
             groups=len(groups))
        raise ExtractionError(
            "No videos found in representation groups",
            strategy="modern",
            details={"groups": len(groups)},
        )

    emit(observer, "modern", SUCCESS, f"Extracted {len(entries)} videos.",
         count=len(entries))
    return entries
