"""
Lookup time window computation

A window is built either from a pair of RFC3339 timestamps or from a pair of
hour offsets relative to now. The timestamp pair wins when both are set.
"""
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil.parser import isoparse

from ..config import ParseSettings
from ..exceptions import TimeFormatError, TimeOrderError
from ..models import TimeWindow


logger = logging.getLogger(__name__)

# full-date "T" full-time, offset mandatory
RFC3339_PATTERN = re.compile(
    r'^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$'
)


def parse_rfc3339(value: str, field_name: str) -> datetime:
    """Parse an RFC3339 timestamp; ISO 8601 forms outside RFC3339 are rejected"""
    value = str(value)
    if not RFC3339_PATTERN.match(value):
        raise TimeFormatError(f"{field_name} parse error: {value!r} is not an RFC3339 timestamp")

    try:
        return isoparse(value.upper())
    except (ValueError, OverflowError) as e:
        raise TimeFormatError(f"{field_name} parse error: {e}")


def window_from_timestamps(start: str, end: str) -> TimeWindow:
    start_time = parse_rfc3339(start, 'startTimeStamp')
    end_time = parse_rfc3339(end, 'endTimeStamp')

    if start_time >= end_time:
        raise TimeOrderError(
            f"startTimeStamp ({start_time.isoformat()}) is at or after endTimeStamp ({end_time.isoformat()})"
        )

    return TimeWindow(start=start_time, end=end_time)


def window_from_hours(start_hour: int, end_hour: int, now: Optional[datetime] = None) -> TimeWindow:
    if start_hour >= end_hour:
        raise TimeOrderError(f"startHour ({start_hour}) is at or after endHour ({end_hour})")

    now = now or datetime.now(timezone.utc)
    return TimeWindow(
        start=now + timedelta(hours=start_hour),
        end=now + timedelta(hours=end_hour)
    )


def resolve_time_window(settings: ParseSettings, now: Optional[datetime] = None) -> Optional[TimeWindow]:
    """
    Compute the lookup window from settings.

    Returns None when neither bound pair is fully configured. Raises a
    TimeWindowError subclass when the configured bounds are invalid.
    """
    if settings.start_timestamp is not None and settings.end_timestamp is not None:
        window = window_from_timestamps(settings.start_timestamp, settings.end_timestamp)
    elif settings.start_hour is not None and settings.end_hour is not None:
        window = window_from_hours(settings.start_hour, settings.end_hour, now=now)
    else:
        logger.warning("No time window configured; set startTimeStamp/endTimeStamp or startHour/endHour")
        return None

    logger.debug(f"Lookup window: {window.start.isoformat()} -> {window.end.isoformat()}")
    return window
