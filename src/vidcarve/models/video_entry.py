"""
Pydantic models for extracted video entries.

Attribute names are snake_case; the camelCase aliases (videoId, audioUrl,
qualityClass, qualityLabel) are what UI consumers read, so serialize with
``model_dump(by_alias=True)``.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Resolution(BaseModel):
    """One quality variant of a video."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    quality_class: str = Field(..., description="'sd'/'hd' or a site-provided class")
    quality_label: str = Field(..., description="Human label, e.g. 'SD', 'HD', '720p'")
    url: str = Field(..., description="Playable stream URL (post-rewrite)")
    key: str = Field(..., description="Unique within the owning entry")


class VideoEntry(BaseModel):
    """One discovered video with its quality variants."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    video_id: str
    key: str
    thumbnail: str | None = None
    audio_url: str | None = None
    resolutions: list[Resolution] = Field(..., min_length=1)

    @field_validator("key")
    @classmethod
    def key_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("key cannot be empty")
        return v

    @model_validator(mode="after")
    def resolution_keys_unique(self) -> "VideoEntry":
        keys = [r.key for r in self.resolutions]
        if len(keys) != len(set(keys)):
            raise ValueError(f"Duplicate resolution keys in {self.key}: {keys}")
        return self

    def get_resolution(self, key: str) -> Resolution | None:
        """Return the resolution with the given key, or None."""
        for resolution in self.resolutions:
            if resolution.key == key:
                return resolution
        return None


class RawRepresentation(BaseModel):
    """A representation as it appears in the prefetch schema.

    Transient: built while partitioning a group and discarded afterwards.
    Unknown fields are ignored; numeric strings and fractional values are
    accepted for bandwidth.
    """

    model_config = ConfigDict(extra="ignore")

    mime_type: str = ""
    bandwidth: float = 0
    base_url: str

    @field_validator("bandwidth", mode="before")
    @classmethod
    def none_bandwidth_is_zero(cls, v):
        return 0 if v is None else v

    @property
    def is_video(self) -> bool:
        return self.mime_type == "video/mp4"

    @property
    def is_audio(self) -> bool:
        return self.mime_type == "audio/mp4"
