"""MoodEntry data model."""

import uuid
from datetime import date, datetime
from typing import Callable, Optional

from pydantic import BaseModel, Field, field_validator

from moodgarden.models.mood import MoodType


def _local_now() -> datetime:
    return datetime.now().astimezone()


class MoodEntry(BaseModel):
    """Represents one logged mood.

    Serialized field names (``date``, ``aiInsight``) match the snapshots
    written by earlier releases and must stay stable.
    """

    id: str = Field(..., min_length=1, description="Unique entry identifier")
    timestamp: datetime = Field(
        ..., alias="date", description="When the mood applies; sole ordering key"
    )
    mood: MoodType = Field(..., description="Mood category")
    note: Optional[str] = Field(default=None, description="User note")
    insight: Optional[str] = Field(
        default=None, alias="aiInsight", description="AI-generated garden wisdom"
    )

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("timestamp")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        # naive timestamps are local time
        if value.tzinfo is None:
            return value.replace(tzinfo=_local_now().tzinfo)
        return value

    def with_insight(self, text: str) -> "MoodEntry":
        """Return a copy of this entry carrying ``text`` as its insight."""
        return self.model_copy(update={"insight": text})


def planting_timestamp(on_date: Optional[date] = None, now: Optional[datetime] = None) -> datetime:
    """Combine a chosen calendar day with the current local time of day.

    Args:
        on_date: Day the mood applies to. Defaults to today.
        now: Current time. Defaults to the local clock.

    Returns:
        Timezone-aware datetime on ``on_date`` at ``now``'s time of day.
    """
    current = now or datetime.now()
    day = on_date or current.date()
    planted = datetime.combine(day, current.time())
    if current.tzinfo is None:
        # local offset in effect on that day, not today's
        return planted.astimezone()
    return planted.replace(tzinfo=current.tzinfo)


def new_entry(
    mood: MoodType,
    note: Optional[str] = None,
    on_date: Optional[date] = None,
    now: Optional[datetime] = None,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> MoodEntry:
    """Create a fresh entry with a new id and planting timestamp.

    Args:
        mood: Mood being planted.
        note: Optional user note. Blank notes are stored as None.
        on_date: Day the mood applies to. Defaults to today.
        now: Current time, used for the time of day.
        id_factory: Produces a collision-free identifier.

    Returns:
        The new MoodEntry. It is not added to any store.
    """
    cleaned = note.strip() if note else None
    return MoodEntry(
        id=id_factory(),
        timestamp=planting_timestamp(on_date, now),
        mood=MoodType(mood),
        note=cleaned or None,
    )
