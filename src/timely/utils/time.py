from datetime import date, datetime, time, timedelta

from timely.exceptions import InvalidStartTimeError

# Wall-clock cursors are anchored to a fixed day so that arithmetic can run
# past midnight without touching timezones.
ANCHOR_DATE = date(1970, 1, 1)

START_TIME_FORMATS = ["%H:%M", "%H:%M:%S", "%I:%M%p", "%I%p"]
CLOCK_FORMAT = "%I:%M %p"
CLOCK_FORMAT_SECONDS = "%I:%M:%S %p"


def parse_start_time(time_str: str) -> time:
    """Parses start times like '09:00', '13:30', '9:30am' or '1pm'."""
    if not isinstance(time_str, str):
        raise InvalidStartTimeError(repr(time_str))
    cleaned = time_str.lower().replace(" ", "")
    for fmt in START_TIME_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).time()
        except ValueError:
            continue
    raise InvalidStartTimeError(time_str)


def anchor(start: time) -> datetime:
    """Returns the wall-clock cursor for ``start`` on the anchor day."""
    return datetime.combine(ANCHOR_DATE, start.replace(second=0, microsecond=0))


def advance(cursor: datetime, minutes: float) -> datetime:
    return cursor + timedelta(minutes=minutes)


def format_clock(value: datetime | time, seconds: bool = False) -> str:
    """
    Formats a wall-clock value as a 12-hour readout, e.g. '09:50 AM'.
    With ``seconds`` the readout matches a ticking clock, e.g. '09:50:07 AM'.
    """
    return value.strftime(CLOCK_FORMAT_SECONDS if seconds else CLOCK_FORMAT)


def format_duration_minutes(minutes: float) -> str:
    """
    Formats a duration in minutes into a human-readable string (e.g. '1h 30m' or '45m').
    """
    whole = int(round(minutes))
    if whole < 60:
        return f"{whole}m"
    hours, remaining = divmod(whole, 60)
    if remaining == 0:
        return f"{hours}h"
    return f"{hours}h {remaining}m"
