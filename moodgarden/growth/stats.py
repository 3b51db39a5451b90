"""Garden statistics.

Aggregations behind the stats view: mood distribution, planting
consistency over the last week, streaks and bloom counts.
"""

from datetime import date, timedelta
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from moodgarden.growth.engine import compute_growth
from moodgarden.models import MoodEntry, MoodType


CONSISTENCY_DAYS = 7


class DailyCount(BaseModel):
    """Number of entries planted on one day."""

    day: date
    count: int = Field(..., ge=0)

    model_config = {"frozen": True}


class GardenStats(BaseModel):
    """Aggregated statistics for a garden."""

    total_entries: int = Field(..., ge=0, description="Total plants in the garden")
    mood_counts: dict[MoodType, int] = Field(
        default_factory=dict, description="Entries per mood, most frequent first"
    )
    top_mood: Optional[MoodType] = Field(default=None, description="Most frequent mood")
    daily_counts: list[DailyCount] = Field(
        default_factory=list, description="Entries per day for the last week, oldest first"
    )
    streak_days: int = Field(default=0, ge=0, description="Consecutive days with an entry")
    wisdom_count: int = Field(default=0, ge=0, description="Entries carrying an insight")
    bloom_count: int = Field(default=0, ge=0, description="Entries in full bloom")

    model_config = {"frozen": True}


def _entry_day(entry: MoodEntry) -> date:
    return entry.timestamp.astimezone().date()


def count_moods(entries: Sequence[MoodEntry]) -> dict[MoodType, int]:
    """Count entries per mood.

    Moods without entries are omitted. The result is ordered by count,
    most frequent first, then by the mood's declaration order.
    """
    counts: dict[MoodType, int] = {}
    for entry in entries:
        counts[entry.mood] = counts.get(entry.mood, 0) + 1

    declared = list(MoodType)
    ordered = sorted(counts.items(), key=lambda item: (-item[1], declared.index(item[0])))
    return dict(ordered)


def daily_counts(
    entries: Sequence[MoodEntry],
    today: Optional[date] = None,
    days: int = CONSISTENCY_DAYS,
) -> list[DailyCount]:
    """Count entries per day over a trailing window ending today."""
    end = today or date.today()
    per_day: dict[date, int] = {}
    for entry in entries:
        day = _entry_day(entry)
        per_day[day] = per_day.get(day, 0) + 1

    window = [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    return [DailyCount(day=d, count=per_day.get(d, 0)) for d in window]


def current_streak(entries: Sequence[MoodEntry], today: Optional[date] = None) -> int:
    """Count consecutive days with at least one entry.

    The streak ends today, or yesterday if nothing was planted today yet.
    """
    end = today or date.today()
    days = {_entry_day(e) for e in entries}

    if end in days:
        cursor = end
    elif end - timedelta(days=1) in days:
        cursor = end - timedelta(days=1)
    else:
        return 0

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def garden_stats(entries: Sequence[MoodEntry], today: Optional[date] = None) -> GardenStats:
    """Compute all garden statistics.

    Args:
        entries: The full entry collection.
        today: Reference day. Defaults to the local date.

    Returns:
        GardenStats for the collection.
    """
    counts = count_moods(entries)
    grown = compute_growth(entries)

    return GardenStats(
        total_entries=len(entries),
        mood_counts=counts,
        top_mood=next(iter(counts), None),
        daily_counts=daily_counts(entries, today),
        streak_days=current_streak(entries, today),
        wisdom_count=sum(1 for e in entries if e.insight),
        bloom_count=sum(1 for g in grown if g.growth.is_max_tier),
    )
