"""Helpers for 24-hour HH:mm time-of-day values."""
import re
from datetime import datetime, time

from errors import InvalidTimeFormat

TIME_FORMAT = '%H:%M'
_TIME_PATTERN = re.compile(r'^\d{2}:\d{2}$')

MINUTES_PER_DAY = 24 * 60


def parse_time(text):
    """Parse a strict two-digit HH:mm string into a time"""
    if text is None or not _TIME_PATTERN.match(text):
        raise InvalidTimeFormat(f"Invalid time format: {text!r}")
    try:
        return datetime.strptime(text, TIME_FORMAT).time()
    except ValueError as e:
        raise InvalidTimeFormat(f"Invalid time format: {text!r}") from e


def format_time(value):
    """Format a time as HH:mm"""
    return value.strftime(TIME_FORMAT)


def minus_hours(value, hours):
    """Subtract whole hours from a time of day, wrapping across midnight"""
    minutes = (value.hour * 60 + value.minute - hours * 60) % MINUTES_PER_DAY
    return time(minutes // 60, minutes % 60)
