"""Static support resources: crisis helplines and the mood catalogue."""

from .crisis import CRISIS_RESOURCES, WARNING_SIGNS, crisis_resources_payload
from .moods import MOODS, MoodEntry, MoodSummary, summarize_moods

__all__ = [
    "CRISIS_RESOURCES",
    "WARNING_SIGNS",
    "crisis_resources_payload",
    "MOODS",
    "MoodEntry",
    "MoodSummary",
    "summarize_moods",
]
