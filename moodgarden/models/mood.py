"""Mood categories and the plant each one grows into."""

from enum import Enum

from pydantic import BaseModel, Field


class MoodType(str, Enum):
    """Closed set of moods a user can plant."""

    HAPPY = "Happy"
    CALM = "Calm"
    SAD = "Sad"
    ANGRY = "Angry"
    ANXIOUS = "Anxious"
    EXCITED = "Excited"
    TIRED = "Tired"


class PlantInfo(BaseModel):
    """Represents the plant a mood blooms into."""

    type: str = Field(..., min_length=1, description="Plant name")
    emoji: str = Field(..., min_length=1, description="Plant icon")
    color: str = Field(..., description="Display colour (hex)")
    description: str = Field(default="", description="Short plant description")

    model_config = {"frozen": True}


MOOD_PLANTS: dict[MoodType, PlantInfo] = {
    MoodType.HAPPY: PlantInfo(
        type="Sunflower",
        emoji="🌻",
        color="#fbbf24",
        description="Basking in the light.",
    ),
    MoodType.CALM: PlantInfo(
        type="Bonsai",
        emoji="🌳",
        color="#10b981",
        description="Rooted and centered.",
    ),
    MoodType.SAD: PlantInfo(
        type="Willow",
        emoji="🎋",
        color="#3b82f6",
        description="Gentle resilience in the rain.",
    ),
    MoodType.ANGRY: PlantInfo(
        type="Cactus",
        emoji="🌵",
        color="#f43f5e",
        description="Protective boundaries and inner strength.",
    ),
    MoodType.ANXIOUS: PlantInfo(
        type="Fern",
        emoji="🌿",
        color="#6366f1",
        description="Delicate complexity and constant movement.",
    ),
    MoodType.EXCITED: PlantInfo(
        type="Paradise Bloom",
        emoji="🌺",
        color="#f97316",
        description="Vibrant energy and bright colors.",
    ),
    MoodType.TIRED: PlantInfo(
        type="Aloe",
        emoji="🌱",
        color="#64748b",
        description="Quiet restoration and healing rest.",
    ),
}
