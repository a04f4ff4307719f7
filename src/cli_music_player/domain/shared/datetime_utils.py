"""Date/time helpers.

Goal: centralize timestamp creation and duration rendering.

- Always operate on timezone-aware UTC datetimes.
- Durations shown to the user are ``M:SS``; minutes are never folded into hours.

This module is intentionally dependency-free and safe to use in any layer.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

ZERO_DURATION = "0:00"


def utcnow() -> datetime:
    return datetime.now(UTC)


def format_duration(seconds: Any) -> str:
    """Render a duration in seconds as ``M:SS``.

    Zero, missing, negative or non-numeric input renders as ``0:00``.
    Fractional seconds (yt-dlp reports floats for some entries) are truncated.
    """
    if not seconds:
        return ZERO_DURATION
    try:
        total = int(seconds)
    except (TypeError, ValueError):
        return ZERO_DURATION
    if total <= 0:
        return ZERO_DURATION

    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"
