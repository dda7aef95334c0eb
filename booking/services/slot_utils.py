"""
slot_utils.py
-------------
Helpers to turn request strings into timezone-aware datetimes, to compute a
local calendar day window, and to generate the bookable start times of one
day within business hours.

Everything here is interpreted in Django's current timezone (settings.TIME_ZONE),
the single "system" zone of the deployment.
"""

import logging
from datetime import date, datetime, time, timedelta

from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_date

from configmgr.models import SystemSetting

from .exceptions import InvalidInput
from .time_range import TimeRange

logger = logging.getLogger(__name__)


def _parse_hhmm(value: str) -> time:
    h, m = value.strip().split(":")
    return time(int(h), int(m))


def _default_business_hours():
    hours = settings.BUSINESS_HOURS
    return _parse_hhmm(hours["start"]), _parse_hhmm(hours["end"])


def get_business_hours():
    """
    Return (open_time, close_time) as time objects.

    settings.BUSINESS_HOURS (08:00-23:55 unless configured) is the default;
    SystemSetting rows BUSINESS_OPEN / BUSINESS_CLOSE override it when both
    are present and valid.
    """
    default_open, default_close = _default_business_hours()

    open_value = SystemSetting.get_value(SystemSetting.BUSINESS_OPEN)
    close_value = SystemSetting.get_value(SystemSetting.BUSINESS_CLOSE)
    if not (open_value and close_value):
        return default_open, default_close

    try:
        open_time, close_time = _parse_hhmm(open_value), _parse_hhmm(close_value)
    except ValueError:
        logger.warning(
            "Ignoring unparseable business hours override %r-%r", open_value, close_value
        )
        return default_open, default_close

    if open_time >= close_time:
        logger.warning(
            "Ignoring business hours override %s-%s: opening is not before closing",
            open_value,
            close_value,
        )
        return default_open, default_close
    return open_time, close_time


def _make_aware(dt_naive: datetime):
    """
    Convert a naive datetime to an aware one using Django's current timezone.
    """
    if timezone.is_aware(dt_naive):
        return dt_naive
    return timezone.make_aware(dt_naive, timezone.get_current_timezone())


def parse_day(value) -> date:
    """
    Accept a date or a 'YYYY-MM-DD' string. Inputs that include a time part
    ('2024-06-10T09:00', '2024-06-10 09:00') are trimmed to the date.
    """
    if isinstance(value, datetime):
        return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()
    if isinstance(value, date):
        return value

    raw = (value or "").strip()
    if "T" in raw:
        raw = raw.split("T", 1)[0].strip()
    elif " " in raw:
        raw = raw.split(" ", 1)[0].strip()

    try:
        parsed = parse_date(raw)
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidInput("Invalid date format. Use YYYY-MM-DD.")
    return parsed


def parse_appointment_time(value: str) -> datetime:
    """'YYYY-MM-DD HH:MM' (local time) -> aware datetime."""
    raw = (value or "").strip()
    try:
        naive = datetime.strptime(raw, settings.SLOT_FORMAT)
    except ValueError:
        raise InvalidInput("Invalid date/time format. Use YYYY-MM-DD HH:MM.") from None
    return _make_aware(naive)


def format_slot(dt: datetime) -> str:
    return timezone.localtime(dt).strftime(settings.SLOT_FORMAT)


def date_to_range(day):
    """
    Convert a date (or 'YYYY-MM-DD') into the local calendar day window
    [start, end) as aware datetimes.
    """
    day = parse_day(day)
    day_start = _make_aware(datetime.combine(day, time.min))
    day_end = _make_aware(datetime.combine(day + timedelta(days=1), time.min))
    return day_start, day_end


def round_up_to_interval(dt: datetime, interval_minutes: int) -> datetime:
    """
    Round up to the next multiple of interval_minutes within the hour.
    Seconds are dropped: 09:17:40 -> 09:20, 09:20:30 -> 09:20.
    """
    minute = ((dt.minute + interval_minutes - 1) // interval_minutes) * interval_minutes
    return dt.replace(minute=0, second=0, microsecond=0) + timedelta(minutes=minute)


def effective_opening(day: date, open_time: time, now: datetime, interval_minutes: int) -> datetime:
    """
    The first candidate start of the day: the regular opening time, or, when
    `day` is today, `now` rounded up to the slot grid if that is later.
    """
    day_open = _make_aware(datetime.combine(day, open_time))
    local_now = timezone.localtime(now)
    if local_now.date() == day:
        day_open = max(day_open, round_up_to_interval(local_now, interval_minutes))
    return day_open


def generate_slots_for_day(
    duration_minutes: int,
    day,
    open_time: time | None = None,
    close_time: time | None = None,
    now: datetime | None = None,
    busy_ranges=(),
    interval_minutes: int | None = None,
):
    """
    Generate candidate start times between open and close hours that do not
    overlap any of `busy_ranges` (TimeRange objects).

    A candidate is kept only if candidate + duration <= close. Returned
    datetimes are timezone-aware and ascending; an empty list means nothing
    fits (never an error).
    """
    if duration_minutes is None or duration_minutes <= 0:
        raise InvalidInput("Duration must be a positive number of minutes.")

    day = parse_day(day)
    if open_time is None or close_time is None:
        open_time, close_time = get_business_hours()
    step = timedelta(minutes=interval_minutes or settings.SLOT_INTERVAL_MINUTES)
    length = timedelta(minutes=duration_minutes)
    now = now or timezone.now()

    current = effective_opening(day, open_time, now, int(step.total_seconds() // 60))
    day_close = _make_aware(datetime.combine(day, close_time))
    busy = sorted(busy_ranges, key=lambda r: r.start)

    slots = []
    while current + length <= day_close:
        candidate = TimeRange(start=current, end=current + length)
        if not any(candidate.overlaps(b) for b in busy):
            slots.append(current)
        current += step

    return slots
