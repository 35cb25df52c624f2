"""
Selection state for choosing a video and a quality.

Mirrors what a picker UI needs: which video is selected, which quality is
selected, and which list row has keyboard focus. An empty video list is a
display condition ("No Media Found"), never an error.
"""

from __future__ import annotations

from collections.abc import Sequence

from vidcarve.models import Resolution, VideoEntry

NO_MEDIA = "No Media Found"
SELECT_PROMPT = "Select a video to see options"


class MediaSelection:
    """Video/quality selection over one extraction result.

    Focus starts on the first video when there is more than one and nothing
    is selected; otherwise it follows the selected video (-1 if none). A
    lone video is selected up front.
    """

    def __init__(
        self,
        videos: Sequence[VideoEntry],
        selected_video_key: str | None = None,
        selected_quality_key: str | None = None,
    ) -> None:
        self.videos = list(videos)
        self.selected_video_key: str | None = None
        self.selected_quality_key: str | None = None
        self.focused_index = -1

        if selected_video_key is not None:
            self.select_video(selected_video_key)
        elif len(self.videos) == 1:
            self.select_video(self.videos[0].key)
        else:
            self._sync_focus()

        if selected_quality_key is not None:
            self.select_quality(selected_quality_key)

    @property
    def has_media(self) -> bool:
        return bool(self.videos)

    @property
    def selected_video(self) -> VideoEntry | None:
        return self._find_video(self.selected_video_key)

    @property
    def selected_resolution(self) -> Resolution | None:
        video = self.selected_video
        if video is None or self.selected_quality_key is None:
            return None
        return video.get_resolution(self.selected_quality_key)

    @property
    def status_message(self) -> str | None:
        """Placeholder text for the current state, or None when a video is shown."""
        if not self.videos:
            return NO_MEDIA
        if self.selected_video is None:
            return SELECT_PROMPT
        return None

    def select_video(self, key: str) -> VideoEntry:
        """Select a video by key; clears a quality that doesn't belong to it.

        Raises:
            KeyError: If no video has this key.
        """
        video = self._find_video(key)
        if video is None:
            raise KeyError(key)
        self.selected_video_key = key
        if self.selected_quality_key and video.get_resolution(self.selected_quality_key) is None:
            self.selected_quality_key = None
        self._sync_focus()
        return video

    def select_quality(self, key: str) -> Resolution:
        """Select a quality of the selected video by key.

        Raises:
            KeyError: If no video is selected or it has no such resolution.
        """
        video = self.selected_video
        resolution = video.get_resolution(key) if video else None
        if resolution is None:
            raise KeyError(key)
        self.selected_quality_key = key
        return resolution

    def focus_next(self) -> int:
        """Move focus down, wrapping around. No-op with one video or fewer."""
        if len(self.videos) > 1:
            self.focused_index = (self.focused_index + 1) % len(self.videos)
        return self.focused_index

    def focus_previous(self) -> int:
        """Move focus up, wrapping around. No-op with one video or fewer."""
        if len(self.videos) > 1:
            self.focused_index = (self.focused_index - 1) % len(self.videos)
        return self.focused_index

    def confirm_focus(self) -> VideoEntry | None:
        """Select the focused video (the Enter key)."""
        if len(self.videos) <= 1 or self.focused_index == -1:
            return None
        return self.select_video(self.videos[self.focused_index].key)

    def _find_video(self, key: str | None) -> VideoEntry | None:
        if key is None:
            return None
        for video in self.videos:
            if video.key == key:
                return video
        return None

    def _sync_focus(self) -> None:
        if self.selected_video_key is not None:
            self.focused_index = next(
                (i for i, v in enumerate(self.videos) if v.key == self.selected_video_key),
                -1,
            )
        elif len(self.videos) > 1:
            self.focused_index = 0
        else:
            self.focused_index = -1
