"""Pydantic models for yt-dlp search results and configuration.

These are infrastructure-specific models for parsing external yt-dlp data
and configuring yt-dlp options.
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cli_music_player.domain.shared.types import (
    HttpUrlStr,
    NonEmptyStr,
    NonNegativeInt,
    PositiveInt,
)

DEFAULT_RETRIES: Final[int] = 3
DEFAULT_SOCKET_TIMEOUT: Final[int] = 10
UNKNOWN_TITLE: Final[str] = "Unknown Title"


class ThumbnailInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    url: HttpUrlStr | None = None

    @field_validator("url", mode="before")
    @classmethod
    def _coerce_url(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.startswith(("http://", "https://")):
            return None
        return v


class SearchEntry(BaseModel):
    """One flat ``ytsearch`` entry.

    Extra fields from yt-dlp are silently ignored. Before-validators coerce
    garbage from external yt-dlp data gracefully; an entry without an id is
    kept here and filtered out when converting to a track.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: NonEmptyStr | None = None
    ie_key: NonEmptyStr | None = None
    title: NonEmptyStr = UNKNOWN_TITLE
    duration: NonNegativeInt | None = None
    artist: NonEmptyStr | None = None
    uploader: NonEmptyStr | None = None
    channel: NonEmptyStr | None = None
    thumbnails: list[ThumbnailInfo] = Field(default_factory=list)

    @field_validator("id", "ie_key", "artist", "uploader", "channel", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        """Convert empty / whitespace-only / non-string values to None."""
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v: Any) -> str:
        """Fall back to default when yt-dlp sends empty or non-string title."""
        if not isinstance(v, str) or not v.strip():
            return UNKNOWN_TITLE
        return v[:500]

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, v: Any) -> int | None:
        """Coerce to non-negative int; return None for garbage values."""
        if v is None:
            return None
        try:
            val = int(v)
            return val if val >= 0 else None
        except (TypeError, ValueError, OverflowError):
            return None

    @field_validator("thumbnails", mode="before")
    @classmethod
    def _coerce_thumbnails(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            return []
        return [t for t in v if isinstance(t, dict)]

    @property
    def display_artist(self) -> str | None:
        return self.uploader or self.channel or self.artist

    @property
    def thumbnail_url(self) -> str | None:
        """First usable thumbnail, matching the order yt-dlp reports them."""
        for thumbnail in self.thumbnails:
            if thumbnail.url:
                return thumbnail.url
        return None


class YtDlpSearchOpts(BaseModel):
    """Typed yt-dlp configuration options passed to YoutubeDL."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = True
    no_warnings: bool = True
    noprogress: bool = True
    noplaylist: bool = True
    skip_download: bool = True
    extract_flat: NonEmptyStr | bool = "in_playlist"
    retries: PositiveInt = DEFAULT_RETRIES
    socket_timeout: PositiveInt = DEFAULT_SOCKET_TIMEOUT
