"""
Data models for vidcarve.
"""

from vidcarve.models.video_entry import RawRepresentation, Resolution, VideoEntry

__all__ = [
    "RawRepresentation",
    "Resolution",
    "VideoEntry",
]
