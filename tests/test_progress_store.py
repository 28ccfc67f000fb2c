"""
Tests for the Progress Store boundary (SQLite session).
"""
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from reading_tracker.core.errors import InvalidReadingDayError, StoreUnavailableError
from reading_tracker.models.reading_progress import CompletedReading
from reading_tracker.services import progress_store

_T1 = datetime(2026, 3, 1, 7, 0, tzinfo=timezone.utc)
_T2 = datetime(2026, 3, 1, 21, 30, tzinfo=timezone.utc)


class TestUpsertCompletedReading:
    def test_insert_new_day(self, db, user_id):
        row = progress_store.upsert_completed_reading(db, user_id, 60, _T1)
        assert row.id > 0
        assert row.reading_day == 60
        assert progress_store.has_completed(db, user_id, 60)

    def test_recomplete_overwrites_not_duplicates(self, db, user_id):
        first = progress_store.upsert_completed_reading(db, user_id, 60, _T1)
        second = progress_store.upsert_completed_reading(db, user_id, 60, _T2, notes="again")
        assert first.id == second.id
        assert second.notes == "again"
        assert progress_store.count_completed_readings(db, user_id) == 1
        rows = db.query(CompletedReading).filter(CompletedReading.user_id == user_id).all()
        assert len(rows) == 1

    def test_same_day_different_users(self, db, user_id):
        progress_store.upsert_completed_reading(db, user_id, 60, _T1)
        progress_store.upsert_completed_reading(db, f"{user_id}-b", 60, _T1)
        assert progress_store.count_completed_readings(db, user_id) == 1
        assert progress_store.count_completed_readings(db, f"{user_id}-b") == 1

    @pytest.mark.parametrize("day", [0, -1, 367])
    def test_out_of_range_day_rejected(self, db, user_id, day):
        with pytest.raises(InvalidReadingDayError):
            progress_store.upsert_completed_reading(db, user_id, day, _T1)
        assert progress_store.count_completed_readings(db, user_id) == 0

    @pytest.mark.parametrize("day", [1, 366])
    def test_boundary_days_accepted(self, db, user_id, day):
        progress_store.upsert_completed_reading(db, user_id, day, _T1)
        assert progress_store.has_completed(db, user_id, day)


class TestFetchCompletedReadings:
    def test_ordered_by_reading_day(self, db, user_id):
        for day in (30, 2, 15):
            progress_store.upsert_completed_reading(db, user_id, day, _T1)
        days = [r.reading_day for r in progress_store.fetch_completed_readings(db, user_id)]
        assert days == [2, 15, 30]

    def test_unknown_user_empty(self, db, user_id):
        assert progress_store.fetch_completed_readings(db, user_id) == []
        assert progress_store.count_completed_readings(db, user_id) == 0
        assert not progress_store.has_completed(db, user_id, 1)


class TestFetchVersePool:
    def test_limit_and_stable_order(self, db):
        pool = progress_store.fetch_verse_pool(db, limit=4)
        assert len(pool) == 4
        assert [v.reading_day for v in pool] == sorted(v.reading_day for v in pool)
        assert [v.id for v in pool] == [v.id for v in progress_store.fetch_verse_pool(db, limit=4)]

    def test_localized_fallback(self, db):
        pool = {v.book: v for v in progress_store.fetch_verse_pool(db, limit=100)}
        assert pool["John"].display_content == pool["John"].content_localized
        assert pool["Psalms"].display_content == pool["Psalms"].content
        # Blank localized text falls back too.
        assert pool["Proverbs"].display_content == pool["Proverbs"].content

    def test_reference_formatting(self, db):
        pool = {v.book: v for v in progress_store.fetch_verse_pool(db, limit=100)}
        assert pool["Psalms"].reference == "Psalms 23:1-3"
        assert pool["John"].reference == "John 3:16"


class TestAchievementData:
    def test_round_trip_json(self, db, user_id):
        progress_store.insert_achievement(
            db, user_id, "yearly_bible_reading", _T1, {"year": 2026, "completed_days": 365}, 2026,
        )
        db.commit()
        [row] = progress_store.fetch_achievements(db, user_id)
        assert progress_store.parse_achievement_data(row.achievement_data)["completed_days"] == 365

    @pytest.mark.parametrize("raw", [None, "", "not-json"])
    def test_bad_payload_is_none(self, raw):
        assert progress_store.parse_achievement_data(raw) is None


class TestStoreFailures:
    def test_query_failure_becomes_store_unavailable(self, db, user_id, monkeypatch):
        def boom(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr(db, "query", boom)
        with pytest.raises(StoreUnavailableError) as excinfo:
            progress_store.fetch_completed_readings(db, user_id)
        assert excinfo.value.http_status == 503
        assert excinfo.value.details["operation"] == "fetch_completed_readings"


class TestCountCompletedReadings:
    def test_year_counts_by_completion_time(self, db, user_id):
        progress_store.upsert_completed_reading(
            db, user_id, 365, datetime(2025, 12, 31, 23, 59, tzinfo=timezone.utc),
        )
        progress_store.upsert_completed_reading(
            db, user_id, 1, datetime(2026, 1, 1, 0, 0, tzinfo=timezone.utc),
        )
        progress_store.upsert_completed_reading(db, user_id, 60, _T1)

        assert progress_store.count_completed_readings(db, user_id) == 3
        assert progress_store.count_completed_readings(db, user_id, year=2025) == 1
        assert progress_store.count_completed_readings(db, user_id, year=2026) == 2
        assert progress_store.count_completed_readings(db, user_id, year=2027) == 0
