"""Tests for garden statistics."""

from datetime import date, datetime, timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from moodgarden.growth import count_moods, current_streak, daily_counts, garden_stats
from moodgarden.models import MoodEntry, MoodType


TODAY = date(2025, 5, 20)


def _on(day: date, entry_id: str, mood: MoodType = MoodType.CALM, insight=None) -> MoodEntry:
    # naive timestamps are interpreted as local time
    return MoodEntry(
        id=entry_id,
        timestamp=datetime(day.year, day.month, day.day, 12, 0),
        mood=mood,
        insight=insight,
    )


class TestMoodCounts:
    """Mood distribution."""

    def test_absent_moods_omitted(self):
        entries = [
            _on(TODAY, "a", MoodType.HAPPY),
            _on(TODAY, "b", MoodType.SAD),
            _on(TODAY, "c", MoodType.HAPPY),
        ]

        counts = count_moods(entries)

        assert counts == {MoodType.HAPPY: 2, MoodType.SAD: 1}
        assert MoodType.CALM not in counts

    def test_ordered_by_count_then_declaration(self):
        entries = [
            _on(TODAY, "a", MoodType.TIRED),
            _on(TODAY, "b", MoodType.CALM),
            _on(TODAY, "c", MoodType.TIRED),
            _on(TODAY, "d", MoodType.ANGRY),
        ]

        assert list(count_moods(entries)) == [MoodType.TIRED, MoodType.CALM, MoodType.ANGRY]

    @given(moods=st.lists(st.sampled_from(list(MoodType)), max_size=50))
    @settings(max_examples=50)
    def test_counts_sum_to_total(self, moods):
        entries = [_on(TODAY, f"e{i}", m) for i, m in enumerate(moods)]
        counts = count_moods(entries)

        assert sum(counts.values()) == len(entries)
        assert all(c > 0 for c in counts.values())


class TestDailyCounts:
    """Planting consistency over the last week."""

    def test_seven_days_oldest_first_with_zero_days(self):
        entries = [
            _on(TODAY, "a"),
            _on(TODAY, "b"),
            _on(TODAY - timedelta(days=3), "c"),
            _on(TODAY - timedelta(days=10), "old"),
        ]

        result = daily_counts(entries, today=TODAY)

        assert [d.day for d in result] == [TODAY - timedelta(days=n) for n in range(6, -1, -1)]
        assert [d.count for d in result] == [0, 0, 0, 1, 0, 0, 2]


class TestStreak:
    """Consecutive days with an entry."""

    def test_streak_ending_today(self):
        entries = [_on(TODAY - timedelta(days=n), f"e{n}") for n in range(4)]
        assert current_streak(entries, today=TODAY) == 4

    def test_streak_ending_yesterday(self):
        entries = [_on(TODAY - timedelta(days=n), f"e{n}") for n in (1, 2)]
        assert current_streak(entries, today=TODAY) == 2

    def test_gap_breaks_streak(self):
        entries = [_on(TODAY, "a"), _on(TODAY - timedelta(days=2), "b")]
        assert current_streak(entries, today=TODAY) == 1

    def test_no_recent_entries(self):
        assert current_streak([_on(TODAY - timedelta(days=5), "a")], today=TODAY) == 0
        assert current_streak([], today=TODAY) == 0


class TestGardenStats:
    """Combined statistics."""

    def test_empty_garden(self):
        result = garden_stats([], today=TODAY)

        assert result.total_entries == 0
        assert result.mood_counts == {}
        assert result.top_mood is None
        assert result.streak_days == 0
        assert len(result.daily_counts) == 7

    def test_summary_tiles(self):
        entries = [
            _on(TODAY - timedelta(days=i // 3), f"h{i}", MoodType.HAPPY) for i in range(9)
        ] + [
            _on(TODAY, "s1", MoodType.SAD, insight="Rain is a gift."),
        ]

        result = garden_stats(entries, today=TODAY)

        assert result.total_entries == 10
        assert result.top_mood == MoodType.HAPPY
        assert result.bloom_count == 1
        assert result.wisdom_count == 1
        assert result.streak_days == 3
