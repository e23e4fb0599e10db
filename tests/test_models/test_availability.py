"""Tests for attraction availability windows and shows."""

from datetime import date, datetime, timedelta, timezone

import pytest

from exceptions import ValidationError
from models.attraction import Show
from models.availability import AvailabilityWindow
from models.calendar import days_in_range, same_day, to_day


class TestCalendar:
    def test_to_day_truncates_timestamps(self):
        assert to_day(datetime(2025, 7, 14, 23, 59)) == date(2025, 7, 14)

    def test_aware_timestamps_use_utc_day(self):
        late = datetime(2025, 7, 14, 22, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert to_day(late) == date(2025, 7, 15)

    def test_same_day(self):
        assert same_day(datetime(2025, 7, 14, 8), date(2025, 7, 14))
        assert not same_day(date(2025, 7, 14), date(2025, 7, 15))
        assert not same_day(None, date(2025, 7, 14))

    def test_days_in_range(self):
        assert len(days_in_range(date(2025, 7, 1), date(2025, 7, 3))) == 3
        assert days_in_range(date(2025, 7, 3), date(2025, 7, 1)) == []


class TestAvailabilityWindow:
    def test_non_seasonal_without_blackouts_is_always_open(self):
        window = AvailabilityWindow()
        assert window.is_available(date(2025, 1, 1))
        assert window.is_available(date(2031, 12, 31))

    def test_none_day_is_unavailable(self):
        assert not AvailabilityWindow().is_available(None)
        seasonal = AvailabilityWindow(True, date(2025, 6, 1), date(2025, 8, 31))
        assert not seasonal.is_available(None)

    def test_season_bounds_are_inclusive(self):
        window = AvailabilityWindow(True, date(2025, 6, 1), date(2025, 8, 31))
        assert window.is_available(date(2025, 6, 1))
        assert window.is_available(date(2025, 8, 31))
        assert not window.is_available(date(2025, 5, 31))
        assert not window.is_available(date(2025, 9, 1))

    def test_maintenance_blacks_out_every_day(self):
        window = AvailabilityWindow()
        added = window.schedule_maintenance(date(2025, 7, 10), date(2025, 7, 12))
        assert added == 3
        for offset in range(3):
            assert not window.is_available(date(2025, 7, 10) + timedelta(days=offset))
        assert window.is_available(date(2025, 7, 13))

    def test_blackout_wins_inside_season(self):
        window = AvailabilityWindow(True, date(2025, 6, 1), date(2025, 8, 31))
        window.schedule_maintenance(date(2025, 7, 4), date(2025, 7, 4))
        assert not window.is_available(datetime(2025, 7, 4, 15, 30))

    def test_reversed_maintenance_range_is_a_no_op(self):
        window = AvailabilityWindow()
        assert window.schedule_maintenance(date(2025, 7, 12), date(2025, 7, 10)) == 0
        assert window.blackout_days == set()

    def test_overlapping_maintenance_counts_new_days_only(self):
        window = AvailabilityWindow()
        window.schedule_maintenance(date(2025, 7, 1), date(2025, 7, 3))
        assert window.schedule_maintenance(date(2025, 7, 3), date(2025, 7, 4)) == 1

    def test_set_season_validates_bounds(self):
        window = AvailabilityWindow()
        with pytest.raises(ValidationError):
            window.set_season(True, date(2025, 9, 1), date(2025, 6, 1))
        with pytest.raises(ValidationError):
            window.set_season(True, None, date(2025, 6, 1))

        window.set_season(True, date(2025, 6, 1), date(2025, 6, 30))
        assert not window.is_available(date(2025, 7, 1))
        window.set_season(False)
        assert window.is_available(date(2025, 7, 1))

    def test_available_days(self):
        window = AvailabilityWindow(True, date(2025, 7, 1), date(2025, 7, 5))
        window.schedule_maintenance(date(2025, 7, 2), date(2025, 7, 3))
        days = window.available_days(date(2025, 6, 30), date(2025, 7, 6))
        assert days == [date(2025, 7, 1), date(2025, 7, 4), date(2025, 7, 5)]


class TestShow:
    def test_performance_days(self):
        show = Show(name="Night Parade", duration_minutes=45)
        assert show.add_performance(datetime(2025, 7, 14, 20, 0))
        assert not show.add_performance(date(2025, 7, 14))
        assert show.is_available(date(2025, 7, 14))
        assert not show.is_available(date(2025, 7, 15))

    def test_cancel_performance(self):
        show = Show(name="Night Parade", performances={date(2025, 7, 14)})
        assert show.cancel_performance(date(2025, 7, 14))
        assert not show.cancel_performance(date(2025, 7, 14))
        assert not show.is_available(date(2025, 7, 14))

    def test_out_of_season_performance_is_unavailable(self):
        show = Show(
            name="Summer Gala",
            window=AvailabilityWindow(True, date(2025, 6, 1), date(2025, 6, 30)),
            performances={date(2025, 7, 2)},
        )
        assert not show.is_available(date(2025, 7, 2))
