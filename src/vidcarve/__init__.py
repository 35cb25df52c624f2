"""
vidcarve - Carve downloadable video streams out of video post pages.

1. Locate the embedded prefetch JSON (or the legacy DASH manifest text)
2. Pick SD/HD streams by bandwidth, plus the audio track and thumbnail
3. Rewrite CDN hosts so the URLs play through a proxy
"""

from vidcarve.config import ConfigSource, VidcarveConfig, get_config
from vidcarve.events import DiagnosticEvent, EventRecorder, LoggingObserver

# Exceptions
from vidcarve.exceptions import (
    ConfigError,
    ExtractionError,
    NetworkError,
    ParseError,
    VidcarveError,
)
from vidcarve.extraction import (
    extract_legacy,
    extract_modern,
    extract_title,
    extract_videos,
    resolve_thumbnail,
)
from vidcarve.fetch import decode_payload, fetch_bytes

# Models
from vidcarve.models import RawRepresentation, Resolution, VideoEntry
from vidcarve.parsing import TextCleaner, locate_embedded_json
from vidcarve.selection import MediaSelection
from vidcarve.urls import UrlRewriter, rewrite_url

__version__ = "0.1.0"

__all__ = [
    # Core functions
    "extract_videos",
    "extract_modern",
    "extract_legacy",
    "extract_title",
    "resolve_thumbnail",
    "locate_embedded_json",
    "rewrite_url",
    "fetch_bytes",
    "decode_payload",
    # Classes
    "TextCleaner",
    "UrlRewriter",
    "MediaSelection",
    "DiagnosticEvent",
    "EventRecorder",
    "LoggingObserver",
    # Models
    "VideoEntry",
    "Resolution",
    "RawRepresentation",
    # Config
    "VidcarveConfig",
    "ConfigSource",
    "get_config",
    # Exceptions
    "VidcarveError",
    "ExtractionError",
    "ParseError",
    "NetworkError",
    "ConfigError",
]
