"""Tests for AnalyticsEngine aggregation."""

from datetime import timedelta

import pytest

from app.errors import ValidationError
from app.schemas.journal_schemas import AnalyticsPeriod, JournalEntryCreate


def _add(journal_store, clock, user, when, emotion=None, intensity=None):
    saved = clock.now
    clock.now = when
    try:
        return journal_store.create_entry(user.id, JournalEntryCreate(primary_emotion=emotion, intensity=intensity))
    finally:
        clock.now = saved


class TestComputeAnalytics:

    def test_example_day(self, journal_store, analytics_engine, clock, alice):
        day = clock.now - timedelta(days=1)
        _add(journal_store, clock, alice, day, "joy", 8)
        _add(journal_store, clock, alice, day + timedelta(hours=1), "joy", 8)
        _add(journal_store, clock, alice, day + timedelta(hours=2), "sad", 4)

        report = analytics_engine.compute_analytics(alice.id, "week")

        assert report.total_entries == 3
        assert report.avg_intensity == 6.7
        assert report.most_common_emotion == "joy"
        assert report.emotion_counts == {"joy": 2, "sad": 1}

    def test_empty_window_defaults(self, analytics_engine, alice):
        report = analytics_engine.compute_analytics(alice.id, AnalyticsPeriod.week)
        assert report.total_entries == 0
        assert report.avg_intensity == 0
        assert report.most_common_emotion == "Neutral"
        assert report.emotion_counts == {}
        assert report.entries == []

    def test_windows(self, journal_store, analytics_engine, clock, alice):
        _add(journal_store, clock, alice, clock.now - timedelta(days=2), "joy", 5)
        _add(journal_store, clock, alice, clock.now - timedelta(days=10), "sad", 5)
        _add(journal_store, clock, alice, clock.now - timedelta(days=45), "angry", 5)

        assert analytics_engine.compute_analytics(alice.id, "week").total_entries == 1
        assert analytics_engine.compute_analytics(alice.id, "month").total_entries == 2
        assert analytics_engine.compute_analytics(alice.id, "all").total_entries == 3

    def test_other_users_entries_ignored(self, journal_store, analytics_engine, clock, alice, bob):
        _add(journal_store, clock, bob, clock.now - timedelta(hours=1), "joy", 9)
        assert analytics_engine.compute_analytics(alice.id, "week").total_entries == 0

    def test_missing_intensity_excluded_from_average(self, journal_store, analytics_engine, clock, alice):
        _add(journal_store, clock, alice, clock.now - timedelta(hours=3), "joy", 9)
        _add(journal_store, clock, alice, clock.now - timedelta(hours=2), "joy", None)
        report = analytics_engine.compute_analytics(alice.id, "week")
        assert report.total_entries == 2
        assert report.avg_intensity == 9.0

    def test_tie_goes_to_first_encountered(self, journal_store, analytics_engine, clock, alice):
        # newest entries are scanned first, so "calm" is seen before "joy"
        _add(journal_store, clock, alice, clock.now - timedelta(days=2), "joy", 5)
        _add(journal_store, clock, alice, clock.now - timedelta(days=1), "calm", 5)
        report = analytics_engine.compute_analytics(alice.id, "week")
        assert report.emotion_counts == {"calm": 1, "joy": 1}
        assert report.most_common_emotion == "calm"

    def test_groups_by_emotion_and_day_newest_first(self, journal_store, analytics_engine, clock, alice):
        older = clock.now - timedelta(days=3)
        newer = clock.now - timedelta(days=1)
        _add(journal_store, clock, alice, older, "joy", 6)
        _add(journal_store, clock, alice, older + timedelta(hours=1), "joy", 7)
        _add(journal_store, clock, alice, newer, "joy", 2)
        _add(journal_store, clock, alice, newer + timedelta(hours=1), "sad", 3)

        report = analytics_engine.compute_analytics(alice.id, "week")
        rows = [(g.emotion, g.date, g.count, g.intensity) for g in report.entries]
        assert rows == [
            ("sad", newer.date().isoformat(), 1, 3.0),
            ("joy", newer.date().isoformat(), 1, 2.0),
            ("joy", older.date().isoformat(), 2, 6.5),
        ]
        assert report.emotion_counts == {"sad": 1, "joy": 3}
        assert report.total_entries == 4

    def test_entries_without_emotion(self, journal_store, analytics_engine, clock, alice):
        _add(journal_store, clock, alice, clock.now - timedelta(hours=1), None, 4)
        report = analytics_engine.compute_analytics(alice.id, "week")
        assert report.total_entries == 1
        assert report.emotion_counts == {}
        assert report.most_common_emotion == "Neutral"
        assert report.entries[0].emotion is None

    def test_half_up_rounding(self, journal_store, analytics_engine, clock, alice):
        for intensity in (6, 6, 7, 6):
            _add(journal_store, clock, alice, clock.now - timedelta(hours=1), "joy", intensity)
        assert analytics_engine.compute_analytics(alice.id, "week").avg_intensity == 6.3

    def test_unknown_period(self, analytics_engine, alice):
        with pytest.raises(ValidationError):
            analytics_engine.compute_analytics(alice.id, "year")

    def test_report_serializes_camel_case(self, analytics_engine, alice):
        body = analytics_engine.compute_analytics(alice.id, "week").model_dump(by_alias=True)
        assert set(body) == {"period", "totalEntries", "avgIntensity", "mostCommonEmotion", "emotionCounts", "entries"}
