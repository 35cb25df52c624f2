"""
Video extraction strategies and the top-level pipeline.
"""

from vidcarve.extraction.legacy import extract_legacy
from vidcarve.extraction.metadata import extract_title
from vidcarve.extraction.modern import extract_modern
from vidcarve.extraction.pipeline import build_strategies, extract_videos, run_strategies
from vidcarve.extraction.thumbnails import resolve_thumbnail

__all__ = [
    "extract_videos",
    "extract_modern",
    "extract_legacy",
    "extract_title",
    "resolve_thumbnail",
    "build_strategies",
    "run_strategies",
]
