"""Local-calendar helpers shared by the calendar and time-tracking views.

All functions work on *local* wall-clock time. Naive datetimes are taken to
already be local; aware datetimes are converted into ``tz`` (or the process
local zone when ``tz`` is None) and returned naive.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Dict, List, Optional, Tuple, Union

DateLike = Union[date, datetime, str]

GRID_START_HOUR = 6
GRID_END_HOUR = 21
PIXELS_PER_HOUR = 64


@dataclass
class GridPosition:
    top: float
    height: float

    def to_css(self) -> Dict[str, str]:
        return {"top": px(self.top), "height": px(self.height)}


def px(value: float) -> str:
    """Render a grid offset the way the browser expects it (``64px``, ``21.5px``)."""
    if float(value).is_integer():
        return f"{int(value)}px"
    return f"{value}px"


def parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp or a bare ``YYYY-MM-DD`` (local midnight)."""
    text = value.strip()
    if len(text) == 10 and "T" not in text:
        return datetime.combine(date.fromisoformat(text), time())
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def local_datetime(value: Optional[DateLike], tz: Optional[tzinfo] = None) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = parse_datetime(value)
    if not isinstance(value, datetime):
        return datetime.combine(value, time())
    if value.tzinfo is not None:
        return value.astimezone(tz).replace(tzinfo=None)
    return value


def to_local_date_key(value: Union[date, datetime], tz: Optional[tzinfo] = None) -> str:
    if isinstance(value, datetime):
        value = local_datetime(value, tz)
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def _date_key(value: DateLike, tz: Optional[tzinfo]) -> str:
    if isinstance(value, str):
        if len(value) == 10 and "T" not in value:
            # already a local date key
            return value
        return to_local_date_key(parse_datetime(value), tz)
    return to_local_date_key(value, tz)


def is_same_day(a: Optional[DateLike], b: Optional[DateLike], tz: Optional[tzinfo] = None) -> bool:
    if not a or not b:
        return False
    return _date_key(a, tz) == _date_key(b, tz)


def format_time(value: Union[datetime, str], tz: Optional[tzinfo] = None) -> str:
    d = local_datetime(value, tz)
    return f"{d.hour:02d}:{d.minute:02d}"


def combine_date_and_time(date_part: Union[date, datetime], time_part: str) -> datetime:
    hours, minutes = (int(p) for p in time_part.split(":")[:2])
    if isinstance(date_part, datetime):
        return date_part.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    return datetime(date_part.year, date_part.month, date_part.day, hours, minutes)


def grid_offset(moment: datetime) -> float:
    """Vertical offset of ``moment`` from the 06:00 grid origin."""
    return (moment.hour - GRID_START_HOUR) * PIXELS_PER_HOUR + (moment.minute / 60) * PIXELS_PER_HOUR


def get_grid_position(
    start_time: Union[datetime, str],
    duration_minutes: float = 60,
    tz: Optional[tzinfo] = None,
) -> Optional[GridPosition]:
    """Place a time of day on the hourly grid, or None if it starts before 06:00.

    Callers must route a None result to their "outside grid" list.
    """
    d = local_datetime(start_time, tz)
    if d.hour < GRID_START_HOUR:
        return None
    height = (duration_minutes / 60) * PIXELS_PER_HOUR
    return GridPosition(top=grid_offset(d), height=height)


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    start = datetime.combine(day, time())
    end = datetime.combine(day, time(23, 59, 59, 999000))
    return start, end


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current wall-clock time in ``tz``, naive like the stored calendar fields."""
    return datetime.now(tz).replace(tzinfo=None)


def today(tz: Optional[tzinfo] = None) -> date:
    return now_local(tz).date()


def week_dates(day: date) -> List[date]:
    """Monday..Sunday of the week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=i) for i in range(7)]
