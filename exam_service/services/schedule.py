import re
from datetime import datetime
from typing import NamedTuple

from exam_service.core.constants import SCHEDULE_DATE_FORMAT, SCHEDULE_TIME_FORMAT
from exam_service.core.exceptions import InvalidScheduleFormatError, InvalidTimeFormatError

# strptime alone accepts single-digit fields such as "2025-1-1 9:0:0".
_STRICT_DATE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")
_TIME_PART = re.compile(r"\d{1,2}")


class Schedule(NamedTuple):
    scheduled_date: datetime
    start_time: datetime
    end_time: datetime


def format_date(value: datetime) -> str:
    return value.strftime(SCHEDULE_DATE_FORMAT)


def format_time(value: datetime) -> str:
    return value.strftime(SCHEDULE_TIME_FORMAT)


class ScheduleValidator:
    """Builds absolute start/end timestamps from the exam schedule strings.

    ``scheduled_date`` must be ``YYYY-MM-DD HH:mm:ss``; start and end are
    ``HH:MM:SS`` times of day placed on the scheduled date's calendar day.
    Start/end ordering is not checked here.
    """

    def parse_date(self, scheduled_date: str) -> datetime:
        if not isinstance(scheduled_date, str) or not _STRICT_DATE.fullmatch(scheduled_date):
            raise InvalidScheduleFormatError()
        try:
            return datetime.strptime(scheduled_date, SCHEDULE_DATE_FORMAT)
        except ValueError:
            raise InvalidScheduleFormatError()

    def at_time_of_day(self, day: datetime, time_of_day: str) -> datetime:
        parts = time_of_day.split(":") if isinstance(time_of_day, str) else []
        if len(parts) != 3 or not all(_TIME_PART.fullmatch(part) for part in parts):
            raise InvalidTimeFormatError()
        hour, minute, second = (int(part) for part in parts)
        try:
            return day.replace(hour=hour, minute=minute, second=second, microsecond=0)
        except (ValueError, OverflowError):
            raise InvalidTimeFormatError()

    def validate(self, scheduled_date: str, start_time: str, end_time: str) -> Schedule:
        day = self.parse_date(scheduled_date)
        start = self.at_time_of_day(day, start_time)
        end = self.at_time_of_day(day, end_time)
        return Schedule(scheduled_date=day, start_time=start, end_time=end)

    def validate_window(self, scheduled_date: str, start_time: str, end_time: str) -> Schedule:
        """``validate`` plus the start-before-end rule the workflows enforce."""
        schedule = self.validate(scheduled_date, start_time, end_time)
        if schedule.end_time <= schedule.start_time:
            raise InvalidTimeFormatError("endTime must be later than startTime.")
        return schedule


schedule_validator = ScheduleValidator()
