"""Mood catalogue and mood-log summaries.

Entries are supplied by the caller (they live in the hosted store);
nothing here reads or writes storage.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from relay_core.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Mood:
    value: str
    label: str
    emoji: str
    color: str


MOODS: Tuple[Mood, ...] = (
    Mood("happy", "Happy", "😊", "#4caf50"),
    Mood("calm", "Calm", "😌", "#2196f3"),
    Mood("anxious", "Anxious", "😰", "#ff9800"),
    Mood("stressed", "Stressed", "😫", "#f44336"),
    Mood("sad", "Sad", "😢", "#9e9e9e"),
    Mood("confused", "Confused", "😕", "#795548"),
    Mood("overwhelmed", "Overwhelmed", "😵", "#e91e63"),
    Mood("hopeful", "Hopeful", "🌟", "#ffd700"),
)
MOOD_VALUES = frozenset(m.value for m in MOODS)

MIN_INTENSITY = 1
MAX_INTENSITY = 5
RECENT_WINDOW = 7
DEFAULT_DAYS = 30
MAX_DAYS = 3650


@dataclass(frozen=True)
class MoodEntry:
    mood: str
    intensity: int
    created_at: datetime
    notes: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "MoodEntry":
        if isinstance(payload, MoodEntry):
            return payload
        if not isinstance(payload, Mapping):
            raise ValidationError(code="INVALID_MOOD_ENTRY", message="mood entry must be an object")
        mood = payload.get("mood")
        if mood not in MOOD_VALUES:
            raise ValidationError(code="INVALID_MOOD_ENTRY", message=f"unknown mood: {mood!r}")
        intensity = payload.get("intensity")
        if isinstance(intensity, bool) or not isinstance(intensity, int) or not (
            MIN_INTENSITY <= intensity <= MAX_INTENSITY
        ):
            raise ValidationError(
                code="INVALID_MOOD_ENTRY",
                message=f"intensity must be an integer between {MIN_INTENSITY} and {MAX_INTENSITY}",
            )
        notes = payload.get("notes") or ""
        return cls(
            mood=mood,
            intensity=intensity,
            created_at=_parse_timestamp(payload.get("created_at")),
            notes=str(notes).strip(),
        )


@dataclass
class MoodSummary:
    total: int
    distribution: Dict[str, int]
    most_common: Optional[str]
    average_intensity: Optional[float]
    recent: List[MoodEntry]

    def to_payload(self) -> Dict[str, Any]:
        data = asdict(self)
        data["recent"] = [
            {**asdict(e), "created_at": e.created_at.isoformat()} for e in self.recent
        ]
        return data


def summarize_moods(
    entries: Iterable[Any],
    days: Optional[int] = DEFAULT_DAYS,
    now: Optional[datetime] = None,
) -> MoodSummary:
    """Summarise a mood log.

    Entries are sorted oldest first and, when ``days`` is set, limited to
    the last ``days`` days relative to ``now``. On a tie for the most common
    mood the one whose first entry is latest wins.
    """

    if days is not None and (isinstance(days, bool) or not isinstance(days, int) or not (1 <= days <= MAX_DAYS)):
        raise ValidationError(code="INVALID_WINDOW", message=f"days must be an integer between 1 and {MAX_DAYS}")
    parsed = sorted((MoodEntry.from_payload(e) for e in entries), key=lambda e: e.created_at)
    if days is not None:
        cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=days)
        if cutoff.tzinfo is None:
            cutoff = cutoff.replace(tzinfo=timezone.utc)
        parsed = [e for e in parsed if e.created_at >= cutoff]

    distribution: Dict[str, int] = {}
    for entry in parsed:
        distribution[entry.mood] = distribution.get(entry.mood, 0) + 1

    most_common: Optional[str] = None
    for mood, count in distribution.items():
        if most_common is None or distribution[most_common] <= count:
            most_common = mood

    average = None
    if parsed:
        average = round(sum(e.intensity for e in parsed) / len(parsed), 2)

    return MoodSummary(
        total=len(parsed),
        distribution=distribution,
        most_common=most_common,
        average_intensity=average,
        recent=parsed[-RECENT_WINDOW:],
    )


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str):
        try:
            ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(code="INVALID_MOOD_ENTRY", message=f"invalid created_at: {value!r}")
    else:
        raise ValidationError(code="INVALID_MOOD_ENTRY", message="created_at is required")
    # 无时区的时间按 UTC 处理
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts
