"""
Tests for date splitting, postponement and weekday token helpers.
"""

from datetime import date

import pytest

from notion_calendar.domain.dates import (
    WEEKDAY_TOKENS,
    combine_timestamp,
    display_date,
    format_repeat_days,
    parse_day,
    parse_repeat_days,
    shift_timestamp,
    split_timestamp,
    validate_clock,
    weekday_number,
)


class TestSplitAndCombine:

    def test_date_only(self):
        assert split_timestamp("2024-03-01") == ("2024-03-01", None)

    def test_date_with_time_and_offset(self):
        assert split_timestamp("2024-03-01T09:30:00.000+09:00") == ("2024-03-01", "09:30")

    def test_missing_value(self):
        assert split_timestamp(None) == (None, None)
        assert split_timestamp("") == (None, None)

    def test_combine(self):
        assert combine_timestamp("2024-03-01") == "2024-03-01"
        assert combine_timestamp("2024-03-01", "18:05") == "2024-03-01T18:05"

    def test_combine_then_split_keeps_parts(self):
        assert split_timestamp(combine_timestamp("2024-12-31", "23:59")) == ("2024-12-31", "23:59")


class TestShiftTimestamp:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2024-02-29T09:00", "2024-03-01T09:00"),
            ("2023-02-28", "2023-03-01"),
            ("2024-12-31T23:30:00.000+09:00", "2025-01-01T23:30:00.000+09:00"),
            ("2024-04-30", "2024-05-01"),
            ("2024-03-05", "2024-03-06"),
        ],
    )
    def test_advances_one_day_and_keeps_suffix(self, value, expected):
        assert shift_timestamp(value) == expected

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            shift_timestamp("not-a-date")


class TestValidation:

    def test_parse_day(self):
        assert parse_day("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2023-02-29", "2024/03/01", "20240301", "2024-3-1"])
    def test_parse_day_rejects(self, value):
        with pytest.raises(ValueError):
            parse_day(value)

    def test_clock(self):
        assert validate_clock("00:00") == "00:00"
        assert validate_clock("23:59") == "23:59"

    @pytest.mark.parametrize("value", ["24:00", "9:00", "12:60", "noon"])
    def test_clock_rejects(self, value):
        with pytest.raises(ValueError):
            validate_clock(value)


class TestWeekdays:

    def test_sunday_first_numbering(self):
        assert weekday_number(date(2024, 3, 3)) == 0  # Sunday
        assert weekday_number(date(2024, 3, 9)) == 6  # Saturday

    def test_tokens_are_a_bijection(self):
        assert format_repeat_days(range(7)) == list(WEEKDAY_TOKENS)
        assert parse_repeat_days(WEEKDAY_TOKENS) == list(range(7))
        assert len(set(WEEKDAY_TOKENS)) == 7

    def test_round_trip_ignores_order_and_duplicates(self):
        assert parse_repeat_days(format_repeat_days([5, 1, 3, 1])) == [1, 3, 5]

    def test_parse_ignores_unknown_tokens(self):
        assert parse_repeat_days(["월", "Monday", "금"]) == [1, 5]

    def test_format_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            format_repeat_days([7])


class TestDisplayDate:

    def test_routine_on_matching_weekday_shows_today(self):
        today = date(2024, 3, 6)  # Wednesday
        assert display_date("2024-01-10", is_routine=True, repeat_days=[3], today=today) == "2024-03-06"

    def test_routine_on_other_weekday_keeps_stored(self):
        today = date(2024, 3, 6)
        assert display_date("2024-01-10", is_routine=True, repeat_days=[1, 5], today=today) == "2024-01-10"

    def test_non_routine_keeps_stored(self):
        today = date(2024, 3, 6)
        assert display_date("2024-01-10", is_routine=False, repeat_days=[3], today=today) == "2024-01-10"
