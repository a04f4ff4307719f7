"""Audio infrastructure - yt-dlp catalog search and mpv player process."""

from cli_music_player.infrastructure.audio.models import SearchEntry, ThumbnailInfo, YtDlpSearchOpts
from cli_music_player.infrastructure.audio.mpv_process import (
    MpvConfig,
    MpvProcess,
    find_player_executable,
)
from cli_music_player.infrastructure.audio.ytdlp_search import YtDlpCatalogSearch

__all__ = [
    "MpvConfig",
    "MpvProcess",
    "SearchEntry",
    "ThumbnailInfo",
    "YtDlpCatalogSearch",
    "YtDlpSearchOpts",
    "find_player_executable",
]
