"""Data models for MoodGarden."""

from moodgarden.models.mood import MOOD_PLANTS, MoodType, PlantInfo
from moodgarden.models.entry import MoodEntry, new_entry
from moodgarden.models.growth import GrowthTier, GrownEntry
from moodgarden.models.snapshot import SCHEMA_VERSION, GardenSnapshot

__all__ = [
    "MOOD_PLANTS",
    "MoodType",
    "PlantInfo",
    "MoodEntry",
    "new_entry",
    "GrowthTier",
    "GrownEntry",
    "SCHEMA_VERSION",
    "GardenSnapshot",
]
