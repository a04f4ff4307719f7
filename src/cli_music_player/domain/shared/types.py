"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the player is defined here once,
so models can simply annotate their fields::

    from cli_music_player.domain.shared.types import NonEmptyStr, DelaySeconds

    class MyModel(BaseModel):
        title: NonEmptyStr
        delay: DelaySeconds
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BeforeValidator, Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""

PlaylistIndex = Annotated[int, Field(ge=0)]
"""Zero-based position inside a playlist."""

DelaySeconds = Annotated[float, Field(gt=0.0, le=30.0)]
"""Timer delay in seconds: (0 … 30]."""

SearchLimit = Annotated[int, Field(gt=0, le=50)]
"""Number of search results requested: 1 … 50."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

TrackTitleStr = Annotated[str, Field(min_length=1, max_length=500)]
"""Track title: 1-500 characters."""

HttpUrlStr = Annotated[str, Field(pattern=r"^https?://")]
"""String that starts with http:// or https://."""

DurationDisplayStr = Annotated[str, Field(pattern=r"^\d+:[0-5]\d$")]
"""Duration rendered as M:SS (minutes are not wrapped into hours)."""


# ── Datetime constraints ────────────────────────────────────────────

def _ensure_utc(v: datetime) -> datetime:
    """Validate that a datetime is timezone-aware and normalise to UTC."""
    if v.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    return v.astimezone(UTC)


UtcDatetimeField = Annotated[datetime, BeforeValidator(_ensure_utc)]
"""Timezone-aware datetime, normalised to UTC on input."""
