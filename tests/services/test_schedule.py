from datetime import datetime

import pytest

from exam_service.core.exceptions import InvalidScheduleFormatError, InvalidTimeFormatError
from exam_service.services.schedule import ScheduleValidator, format_date, format_time


@pytest.fixture
def validator():
    return ScheduleValidator()


def test_places_times_on_the_scheduled_day(validator):
    schedule = validator.validate("2025-01-01 00:00:00", "09:00:00", "11:30:15")

    assert schedule.scheduled_date == datetime(2025, 1, 1)
    assert schedule.start_time == datetime(2025, 1, 1, 9, 0, 0)
    assert schedule.end_time == datetime(2025, 1, 1, 11, 30, 15)


def test_time_of_day_replaces_the_date_clock(validator):
    schedule = validator.validate("2025-03-10 14:45:00", "08:00:00", "10:00:00")

    assert schedule.start_time == datetime(2025, 3, 10, 8, 0, 0)


@pytest.mark.parametrize("value", [
    "2025-13-40 00:00:00",
    "2025-01-01",
    "2025-1-1 0:0:0",
    "01/01/2025 00:00:00",
    "",
    None,
])
def test_rejects_malformed_scheduled_dates(validator, value):
    with pytest.raises(InvalidScheduleFormatError):
        validator.validate(value, "09:00:00", "11:00:00")


@pytest.mark.parametrize("value", [
    "9:00",
    "aa:bb:cc",
    "25:00:00",
    "09:60:00",
    "09:00:00:00",
    "",
    "99999999999999999999:00:00",
    "+9:00:00",
    " 9:00:00",
])
def test_rejects_malformed_times(validator, value):
    with pytest.raises(InvalidTimeFormatError):
        validator.validate("2025-01-01 00:00:00", value, "11:00:00")


def test_accepts_unpadded_time_parts(validator):
    schedule = validator.validate("2025-01-01 00:00:00", "9:5:0", "11:00:00")

    assert schedule.start_time == datetime(2025, 1, 1, 9, 5, 0)


def test_date_is_checked_before_times(validator):
    with pytest.raises(InvalidScheduleFormatError):
        validator.validate("not a date", "bad", "bad")


def test_validate_does_not_order_start_and_end(validator):
    schedule = validator.validate("2025-01-01 00:00:00", "11:00:00", "09:00:00")

    assert schedule.end_time < schedule.start_time


@pytest.mark.parametrize("start,end", [("11:00:00", "09:00:00"), ("09:00:00", "09:00:00")])
def test_validate_window_requires_end_after_start(validator, start, end):
    with pytest.raises(InvalidTimeFormatError) as exc_info:
        validator.validate_window("2025-01-01 00:00:00", start, end)
    assert exc_info.value.message == "endTime must be later than startTime."


def test_display_formats():
    value = datetime(2025, 1, 1, 9, 5, 7)

    assert format_date(value) == "2025-01-01 09:05:07"
    assert format_time(value) == "09:05:07"


def test_formatted_schedule_validates_back_to_the_same_timestamps(validator):
    schedule = validator.validate("2025-03-10 14:45:00", "08:00:00", "10:30:15")

    again = validator.validate(
        format_date(schedule.scheduled_date),
        format_time(schedule.start_time),
        format_time(schedule.end_time),
    )

    assert again == schedule
