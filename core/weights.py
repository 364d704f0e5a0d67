from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

EVENT_TYPES: Tuple[str, ...] = ("play_track", "like_track", "add_track_to_playlist", "share_track")


@dataclass(frozen=True)
class EventWeights:
    play_track: int = 1
    like_track: int = 2
    add_track_to_playlist: int = 2
    share_track: int = 3

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


DEFAULT_WEIGHTS = EventWeights()


def _as_weight(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        out = int(value)
    except (TypeError, ValueError):
        return default
    return max(0, out)


def normalize_weights(raw: Optional[Mapping[str, Any]]) -> EventWeights:
    """Build weights from a loose mapping, keeping defaults for anything unreadable."""
    raw = raw or {}
    defaults = DEFAULT_WEIGHTS.as_dict()
    return EventWeights(**{event: _as_weight(raw.get(event), defaults[event]) for event in EVENT_TYPES})


def engagement_score(counts: Mapping[str, Any], weights: EventWeights = DEFAULT_WEIGHTS) -> int:
    """Weighted sum of the ``<event_type>_count`` fields of one report row."""
    mapping = weights.as_dict()
    return sum(int(counts.get(f"{event}_count", 0) or 0) * mapping[event] for event in EVENT_TYPES)
