"""Growth tier models.

Growth tiers are derived from the entry history on every read and are
never persisted.
"""

from pydantic import BaseModel, Field

from moodgarden.models.entry import MoodEntry


class GrowthTier(BaseModel):
    """Represents the growth stage of one entry's plant."""

    tier_level: int = Field(..., ge=1, le=4, description="Growth tier (1-4)")
    tier_label: str = Field(..., description="Display tag for the tier")
    occurrence_rank: int = Field(
        ..., ge=1, description="Nth time this mood was logged, by ascending timestamp"
    )
    is_max_tier: bool = Field(default=False, description="Whether the plant is in full bloom")
    icon: str = Field(..., description="Growth-stage icon, or the mood plant at full bloom")

    model_config = {"frozen": True}


class GrownEntry(BaseModel):
    """An entry paired with its derived growth tier."""

    entry: MoodEntry
    growth: GrowthTier

    model_config = {"frozen": True}
