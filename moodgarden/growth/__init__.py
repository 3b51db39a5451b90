"""Growth engine and garden statistics."""

from moodgarden.growth.engine import (
    GROWTH_STAGES,
    TIER_LABELS,
    GrowthCache,
    compute_growth,
    occurrence_ranks,
    tier_for_rank,
)
from moodgarden.growth.stats import (
    DailyCount,
    GardenStats,
    count_moods,
    current_streak,
    daily_counts,
    garden_stats,
)

__all__ = [
    "GROWTH_STAGES",
    "TIER_LABELS",
    "GrowthCache",
    "compute_growth",
    "occurrence_ranks",
    "tier_for_rank",
    "DailyCount",
    "GardenStats",
    "count_moods",
    "current_streak",
    "daily_counts",
    "garden_stats",
]
