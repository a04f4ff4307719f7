"""CatalogSearch implementation using yt-dlp flat search."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, cast

from yt_dlp import YoutubeDL

from cli_music_player.application.interfaces.catalog_search import CatalogSearch
from cli_music_player.config.settings import SearchSettings
from cli_music_player.domain.music.entities import Track
from cli_music_player.domain.music.value_objects import TrackId
from cli_music_player.domain.shared.exceptions import CatalogSearchError
from cli_music_player.domain.shared.messages import LogTemplates

from .models import SearchEntry, YtDlpSearchOpts

logger = logging.getLogger(__name__)


class YtDlpCatalogSearch(CatalogSearch):

    def __init__(self, settings: SearchSettings | None = None) -> None:
        self._settings = settings or SearchSettings()
        self._opts = YtDlpSearchOpts(
            retries=max(self._settings.retries, 1),
            socket_timeout=self._settings.socket_timeout,
        )

    @staticmethod
    def _parse_entry(data: dict[str, Any]) -> SearchEntry:
        return SearchEntry.model_validate(data)

    def _entry_to_track(self, entry: SearchEntry) -> Track | None:
        if entry.id is None or not TrackId.is_valid(entry.id):
            logger.debug(LogTemplates.SEARCH_ENTRY_SKIPPED, entry.title, "no playable id")
            return None

        return Track.from_search_result(
            track_id=entry.id,
            title=entry.title,
            artist=entry.display_artist,
            duration_seconds=entry.duration,
            thumbnail_url=entry.thumbnail_url,
        )

    def _search_sync(self, query: str, limit: int) -> list[SearchEntry]:
        search_query = f"ytsearch{limit}:{query}"
        try:
            with YoutubeDL(params=cast(Any, self._opts.model_dump())) as ydl:
                data = ydl.extract_info(search_query, download=False)
        except Exception as e:
            raise CatalogSearchError(query) from e

        if not isinstance(data, dict):
            return []

        entries = data.get("entries") or []
        if not isinstance(entries, list):
            return []

        return [self._parse_entry(dict(e)) for e in entries if isinstance(e, dict)]

    async def search(self, query: str, limit: int | None = None) -> list[Track]:
        query = query.strip()
        if not query:
            return []

        limit = limit or self._settings.result_limit
        logger.info(LogTemplates.SEARCH_STARTED, query, limit)

        try:
            entries = await asyncio.to_thread(self._search_sync, query, limit)
        except CatalogSearchError:
            logger.exception(LogTemplates.SEARCH_FAILED, query)
            return []

        tracks: list[Track] = []
        for entry in entries:
            track = self._entry_to_track(entry)
            if track:
                tracks.append(track)

        logger.info(LogTemplates.SEARCH_COMPLETED, query, len(tracks))
        return tracks
