from datetime import date, datetime, timedelta, timezone
from langlink.engine.streak import (
    advance_by_calendar_date, advance_by_day_difference, parse_activity_date,
)

TODAY = date(2026, 2, 27)
YESTERDAY = TODAY - timedelta(days=1)
TWO_DAYS_AGO = TODAY - timedelta(days=2)
THREE_DAYS_AGO = TODAY - timedelta(days=3)
TOMORROW = TODAY + timedelta(days=1)


class TestCalendarDatePolicy:
    def test_first_activity_starts_streak_at_1(self):
        assert advance_by_calendar_date(None, 0, TODAY) == 1

    def test_consecutive_day_increments_streak(self):
        assert advance_by_calendar_date(YESTERDAY, 5, TODAY) == 6

    def test_same_day_leaves_streak(self):
        assert advance_by_calendar_date(TODAY, 5, TODAY) == 5

    def test_gap_resets_to_1(self):
        assert advance_by_calendar_date(THREE_DAYS_AGO, 10, TODAY) == 1
        assert advance_by_calendar_date(TWO_DAYS_AGO, 10, TODAY) == 1

    def test_future_date_resets_to_1(self):
        assert advance_by_calendar_date(TOMORROW, 4, TODAY) == 1

    def test_time_of_day_ignored(self):
        late_yesterday = datetime(2026, 2, 26, 23, 30)
        assert advance_by_calendar_date(late_yesterday, 2, datetime(2026, 2, 27, 0, 5)) == 3


class TestDayDifferencePolicy:
    def test_first_activity_starts_streak_at_1(self):
        assert advance_by_day_difference(None, 0, TODAY) == 1

    def test_consecutive_day_increments_streak(self):
        assert advance_by_day_difference(YESTERDAY, 5, TODAY) == 6

    def test_same_day_leaves_streak(self):
        assert advance_by_day_difference(TODAY, 5, TODAY) == 5

    def test_gap_resets_to_1(self):
        assert advance_by_day_difference(THREE_DAYS_AGO, 10, TODAY) == 1
        assert advance_by_day_difference(TWO_DAYS_AGO, 10, TODAY) == 1

    def test_future_date_leaves_streak(self):
        assert advance_by_day_difference(TOMORROW, 4, TODAY) == 4

    def test_partial_day_rounds_down(self):
        evening_before = datetime(2026, 2, 26, 18, 0, tzinfo=timezone.utc)
        assert advance_by_day_difference(evening_before, 3, TODAY) == 3

    def test_naive_and_aware_values_mix(self):
        aware_yesterday = datetime(2026, 2, 26, tzinfo=timezone.utc)
        assert advance_by_day_difference(aware_yesterday, 1, TODAY) == 2


class TestPoliciesDiverge:
    def test_timestamp_late_on_previous_day(self):
        last = datetime(2026, 2, 26, 18, 0)
        assert advance_by_calendar_date(last, 3, TODAY) == 4
        assert advance_by_day_difference(last, 3, TODAY) == 3

    def test_future_last_active(self):
        assert advance_by_calendar_date(TOMORROW, 7, TODAY) == 1
        assert advance_by_day_difference(TOMORROW, 7, TODAY) == 7


class TestParseActivityDate:
    def test_none_and_empty(self):
        assert parse_activity_date(None) is None
        assert parse_activity_date("") is None

    def test_iso_date(self):
        assert parse_activity_date("2026-02-27") == TODAY

    def test_iso_timestamp(self):
        assert parse_activity_date("2026-02-27T08:15:00+00:00") == datetime(
            2026, 2, 27, 8, 15, tzinfo=timezone.utc
        )

    def test_date_passthrough(self):
        assert parse_activity_date(TODAY) is TODAY
