"""
Per-modality engagement scoring (0-100).
"""
import math
from typing import Any, Optional

from learnsense.core.engine.schemas import Modality

MAX_ENGAGEMENT = 100.0
SECONDS_PER_POINT = 10  # 10 seconds of reading = 1 point
POINTS_PER_PLAYBACK = 20  # full engagement at 5 plays


def as_number(value: Any) -> float:
    """Coerce a loosely-typed numeric field; absent or malformed values count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _clamp(value: float) -> float:
    return max(0.0, min(MAX_ENGAGEMENT, value))


def text_engagement(reading_time_seconds: Any) -> float:
    return _clamp(as_number(reading_time_seconds) / SECONDS_PER_POINT)


def audio_engagement(playback_count: Any) -> float:
    return _clamp(as_number(playback_count) * POINTS_PER_PLAYBACK)


def visual_engagement(focus_level: Any) -> float:
    # Focus is already on a 0-100 scale
    return _clamp(as_number(focus_level))


def score_engagement(
    modality: Modality,
    reading_time_seconds: Any = 0,
    playback_count: Any = 0,
    focus_level: Optional[Any] = None,
) -> float:
    """
    Engagement for one record, using the signal that matters for its modality.

    Args:
        modality: Resolved modality of the record
        reading_time_seconds: Cumulative reading time (text)
        playback_count: Cumulative audio plays (audio)
        focus_level: Latest focus reading (visual)

    Returns:
        Engagement in [0, 100]; 0 when the relevant signal is missing
    """
    if modality == Modality.TEXT:
        return text_engagement(reading_time_seconds)
    if modality == Modality.AUDIO:
        return audio_engagement(playback_count)
    return visual_engagement(focus_level)
