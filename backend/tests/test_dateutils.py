"""Local-calendar helpers: day keys, parsing and hour-grid offsets."""

from datetime import date, datetime, timedelta, timezone

from planner.services.dateutils import (
    combine_date_and_time,
    day_bounds,
    format_time,
    get_grid_position,
    is_same_day,
    local_datetime,
    parse_datetime,
    px,
    to_local_date_key,
    week_dates,
)

PLUS_TWO = timezone(timedelta(hours=2))


class TestGridPosition:
    def test_grid_origin_is_six_oclock(self):
        position = get_grid_position(datetime(2024, 5, 6, 6, 0))
        assert position.to_css() == {"top": "0px", "height": "64px"}

    def test_half_hours_and_duration(self):
        position = get_grid_position(datetime(2024, 5, 6, 9, 30), duration_minutes=90)
        assert position.top == 224
        assert position.height == 96

    def test_before_grid_has_no_position(self):
        assert get_grid_position(datetime(2024, 5, 6, 5, 30)) is None

    def test_fractional_pixels(self):
        assert px(21.5) == "21.5px"
        assert px(64.0) == "64px"


class TestDayKeys:
    def test_date_only_string_is_local_midnight(self):
        assert parse_datetime("2024-05-06") == datetime(2024, 5, 6)
        assert local_datetime("2024-05-06") == datetime(2024, 5, 6)

    def test_zulu_suffix(self):
        parsed = parse_datetime("2024-05-06T10:00:00Z")
        assert parsed.tzinfo is not None
        assert parsed.utcoffset() == timedelta(0)

    def test_aware_instant_is_converted_before_keying(self):
        late_utc = datetime(2024, 5, 6, 22, 30, tzinfo=timezone.utc)
        assert to_local_date_key(late_utc, PLUS_TWO) == "2024-05-07"
        assert local_datetime(late_utc, PLUS_TWO) == datetime(2024, 5, 7, 0, 30)

    def test_same_day_mixes_keys_dates_and_datetimes(self):
        assert is_same_day("2024-05-06", datetime(2024, 5, 6, 23, 59))
        assert is_same_day(date(2024, 5, 6), "2024-05-06T08:00:00")
        assert not is_same_day(date(2024, 5, 6), datetime(2024, 5, 7, 0, 0))
        assert not is_same_day(None, date(2024, 5, 6))

    def test_format_time(self):
        assert format_time(datetime(2024, 5, 6, 7, 5)) == "07:05"


class TestCalendarRanges:
    def test_combine_date_and_time(self):
        assert combine_date_and_time(date(2024, 5, 6), "08:15") == datetime(2024, 5, 6, 8, 15)

    def test_day_bounds_cover_the_whole_day(self):
        start, end = day_bounds(date(2024, 5, 6))
        assert start == datetime(2024, 5, 6)
        assert end.date() == date(2024, 5, 6)
        assert end.hour == 23 and end.minute == 59

    def test_week_runs_monday_to_sunday(self):
        week = week_dates(date(2024, 5, 8))
        assert week[0] == date(2024, 5, 6)
        assert week[-1] == date(2024, 5, 12)
        assert len(week) == 7
