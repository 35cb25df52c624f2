"""
Thumbnail resolution through an ordered chain of lookup strategies.

Strategies over parsed JSON, first hit wins:

1. ``data.video.story.attachments[i].media`` thumbnail fields
2. ``extensions.all_video_dash_prefetch_representations[i].video_thumbnail``
3. ``data.video.story.attachments[0].media.preferred_thumbnail`` as default

When no parsed JSON is available and none can be produced from the page, a
set of regexes is run directly over the raw text instead.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from typing import Any

from vidcarve.events import SKIPPED, SUCCESS, Observer, emit, null_observer
from vidcarve.exceptions import ExtractionError
from vidcarve.parsing.json_locator import REPRESENTATIONS_KEY, locate_embedded_json
from vidcarve.parsing.paths import dig, dig_str

ThumbnailStrategy = Callable[[Any, int], str | None]

_ATTACHMENTS_PATH = ("data", "video", "story", "attachments")

# Searched in order over raw text when there is no JSON to walk.
THUMBNAIL_PATTERNS: list[re.Pattern] = [
    re.compile(r"preferred_thumbnail[^}]*image[^}]*uri[\"']\s*:\s*[\"']([^\"']+)[\"']"),
    re.compile(r"thumbnail[^}]*uri[\"']\s*:\s*[\"']([^\"']+)[\"']"),
    re.compile(r"image[^}]*uri[\"']\s*:\s*[\"']([^\"']+)[\"']"),
]

CDN_MARKER = "fbcdn.net"
IMAGE_EXTENSIONS = (".jpg", ".png")


def from_attachment_media(data: Any, index: int) -> str | None:
    """Per-video thumbnail from the story attachment at ``index``."""
    media = dig(data, *_ATTACHMENTS_PATH, index, "media")
    return (
        dig_str(media, "preferred_thumbnail", "image", "uri")
        or dig_str(media, "thumbnail_image", "uri")
        or dig_str(media, "image", "uri")
    )


def from_representation_group(data: Any, index: int) -> str | None:
    """Per-video thumbnail stored next to the prefetch representations."""
    return dig_str(data, "extensions", REPRESENTATIONS_KEY, index, "video_thumbnail", "uri")


def from_first_attachment(data: Any, index: int) -> str | None:
    """The first attachment's preferred thumbnail, whatever the index."""
    return dig_str(data, *_ATTACHMENTS_PATH, 0, "media", "preferred_thumbnail", "image", "uri")


STRATEGIES: list[tuple[str, ThumbnailStrategy]] = [
    ("attachment_media", from_attachment_media),
    ("representation_group", from_representation_group),
    ("first_attachment", from_first_attachment),
]


def is_cdn_image(url: str) -> bool:
    return CDN_MARKER in url and any(ext in url for ext in IMAGE_EXTENSIONS)


def search_text(text: str) -> str | None:
    """Regex fallback over raw text; only CDN-hosted jpg/png URLs qualify."""
    for pattern in THUMBNAIL_PATTERNS:
        match = pattern.search(text)
        if match and is_cdn_image(match.group(1)):
            return match.group(1).replace("\\/", "/")
    return None


def _load_json(html: str) -> Any:
    """Parse the page as JSON, then try the locator; None if both fail."""
    try:
        return json.loads(html)
    except (json.JSONDecodeError, RecursionError, TypeError):
        pass
    try:
        return locate_embedded_json(html, observer=null_observer)
    except ExtractionError:
        return None


def resolve_thumbnail(
    html: str,
    parsed_json: Any = None,
    video_index: int = 0,
    observer: Observer | None = None,
) -> str | None:
    """Resolve a thumbnail URL for one video. Never raises.

    Args:
        html: Raw page text (used when parsed_json is None).
        parsed_json: Already-parsed page JSON, if the caller has it.
        video_index: Position of the video in the representations list.
        observer: Optional diagnostic observer.

    Returns:
        Thumbnail URL, or None if no strategy finds one.
    """
    if parsed_json is None:
        parsed_json = _load_json(html)
        if parsed_json is None:
            url = search_text(html if isinstance(html, str) else json.dumps(html))
            if url:
                emit(observer, "thumbnail", SUCCESS, "Thumbnail found by text search",
                     index=video_index)
            else:
                emit(observer, "thumbnail", SKIPPED, "No thumbnail in raw text",
                     index=video_index)
            return url

    for name, strategy in STRATEGIES:
        url = strategy(parsed_json, video_index)
        if url:
            emit(observer, "thumbnail", SUCCESS, f"Thumbnail found via {name}",
                 index=video_index, strategy=name)
            return url

    emit(observer, "thumbnail", SKIPPED, "No thumbnail found", index=video_index)
    return None
