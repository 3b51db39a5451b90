"""Growth stage derivation.

A plant grows as the same mood is logged again and again. The tier of an
entry depends only on its mood and on how many same-mood entries precede
it in time, so tiers are recomputed from the full history on every read.
"""

from typing import Optional, Sequence

from moodgarden.models import MOOD_PLANTS, GrowthTier, GrownEntry, MoodEntry, MoodType


# Generic icons for tiers 1-3; tier 4 shows the mood's own plant.
GROWTH_STAGES = ("🌱", "🌿", "🪴")

SEEDLING_MAX_RANK = 2
SPROUT_MAX_RANK = 5
YOUNG_PLANT_MAX_RANK = 8

TIER_LABELS = {
    1: "Seedling",
    2: "Sprout",
    3: "Young Plant",
    4: "Full Bloom",
}


def tier_for_rank(mood: MoodType, occurrence_rank: int) -> GrowthTier:
    """Map an occurrence rank to its growth tier.

    Args:
        mood: Mood of the entry.
        occurrence_rank: 1-based rank among same-mood entries.

    Returns:
        The growth tier.

    Raises:
        ValueError: If ``occurrence_rank`` is less than 1.
    """
    if occurrence_rank < 1:
        raise ValueError(f"occurrence_rank must be >= 1, got {occurrence_rank}")

    if occurrence_rank <= SEEDLING_MAX_RANK:
        level = 1
    elif occurrence_rank <= SPROUT_MAX_RANK:
        level = 2
    elif occurrence_rank <= YOUNG_PLANT_MAX_RANK:
        level = 3
    else:
        level = 4

    is_max = level == 4
    icon = MOOD_PLANTS[MoodType(mood)].emoji if is_max else GROWTH_STAGES[level - 1]

    return GrowthTier(
        tier_level=level,
        tier_label=TIER_LABELS[level],
        occurrence_rank=occurrence_rank,
        is_max_tier=is_max,
        icon=icon,
    )


def occurrence_ranks(entries: Sequence[MoodEntry]) -> list[int]:
    """Compute the occurrence rank of every entry.

    Entries are walked oldest first, ties broken by id, whatever order
    they are given in.

    Args:
        entries: Entries in any order.

    Returns:
        Ranks aligned with ``entries``.
    """
    order = sorted(range(len(entries)), key=lambda i: (entries[i].timestamp, entries[i].id))

    counts: dict[MoodType, int] = {}
    ranks = [0] * len(entries)
    for i in order:
        mood = entries[i].mood
        counts[mood] = counts.get(mood, 0) + 1
        ranks[i] = counts[mood]
    return ranks


def compute_growth(entries: Sequence[MoodEntry]) -> list[GrownEntry]:
    """Derive the growth tier of every entry.

    Args:
        entries: Entries in the order the caller wants back
            (typically the store's newest-first order).

    Returns:
        GrownEntry list in the same order as ``entries``.
    """
    ranks = occurrence_ranks(entries)
    return [
        GrownEntry(entry=entry, growth=tier_for_rank(entry.mood, rank))
        for entry, rank in zip(entries, ranks)
    ]


class GrowthCache:
    """Memoises ``compute_growth`` for one store.

    The cached result is keyed by the store's mutation counter, so any
    add, delete or insight attachment invalidates it.
    """

    def __init__(self, store):
        self._store = store
        self._version: Optional[int] = None
        self._grown: list[GrownEntry] = []

    def grown(self) -> list[GrownEntry]:
        """Get grown entries for the store's current collection."""
        version = self._store.version
        if version != self._version:
            self._grown = compute_growth(self._store.list())
            self._version = version
        return list(self._grown)
