"""Day view: which records are active on a date and where they sit on the grid.

The visible grid runs from 06:00 to 21:00 at 64 units per hour. Actions are
interval-shaped (start_date/due_date, either optional) and may span several
days; meetings are a single instant with a fixed 60 minute block.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Tuple

from planner.models.enums import STATUS_DONE
from planner.services.dateutils import (
    GRID_END_HOUR,
    GRID_START_HOUR,
    PIXELS_PER_HOUR,
    GridPosition,
    day_bounds,
    format_time,
    get_grid_position,
    grid_offset,
    is_same_day,
    local_datetime,
    px,
)

MEETING_DEFAULT_MINUTES = 60
OVERDUE_BLOCK_HEIGHT = 32
MIN_ACTION_HEIGHT = 24


@dataclass
class ActionPlacement:
    top: float
    height: float
    is_overdue: bool = False

    def to_css(self) -> Dict[str, Any]:
        return {"top": px(self.top), "height": px(self.height), "is_overdue": self.is_overdue}


def effective_interval(action: Any, tz: Optional[tzinfo] = None) -> Optional[Tuple[datetime, datetime]]:
    """(start, end) of an action: each side falls back to the other date."""
    start_date = local_datetime(action.start_date, tz)
    due_date = local_datetime(action.due_date, tz)
    start = start_date or due_date
    end = due_date or start_date
    if start is None or end is None:
        return None
    return start, end


def is_overdue(action: Any, day: date, tz: Optional[tzinfo] = None) -> bool:
    """Effective end strictly before the start of ``day`` and not Done."""
    interval = effective_interval(action, tz)
    if interval is None:
        return False
    day_start, _ = day_bounds(day)
    return interval[1] < day_start and action.status != STATUS_DONE


def is_action_on_day(action: Any, day: date, tz: Optional[tzinfo] = None) -> bool:
    interval = effective_interval(action, tz)
    if interval is None:
        return False
    start, end = interval
    day_start, day_end = day_bounds(day)
    overlapping = start <= day_end and end >= day_start
    return overlapping or is_overdue(action, day, tz)


def place_action(action: Any, day: date, tz: Optional[tzinfo] = None) -> Optional[ActionPlacement]:
    """Grid placement for a member action, or None when it falls outside 06:00-21:00."""
    interval = effective_interval(action, tz)
    if interval is None:
        return None
    if is_overdue(action, day, tz):
        return ActionPlacement(top=0, height=OVERDUE_BLOCK_HEIGHT, is_overdue=True)

    start, end = interval
    grid_start = datetime.combine(day, time(GRID_START_HOUR))
    grid_end = datetime.combine(day, time(GRID_END_HOUR))
    clamped_start = max(start, grid_start)
    clamped_end = min(end, grid_end)
    if clamped_end <= clamped_start:
        return None

    minutes = (clamped_end - clamped_start).total_seconds() / 60
    height = (minutes / 60) * PIXELS_PER_HOUR
    return ActionPlacement(top=max(0, grid_offset(clamped_start)), height=max(MIN_ACTION_HEIGHT, height))


def work_overlay(entry: Any) -> Optional[GridPosition]:
    """Translucent working-hours band; drawn independently of the items."""
    if entry is None or not entry.start_time or not entry.end_time:
        return None
    start_h, start_m = (int(p) for p in entry.start_time.split(":")[:2])
    end_h, end_m = (int(p) for p in entry.end_time.split(":")[:2])
    minutes = (end_h * 60 + end_m) - (start_h * 60 + start_m)
    if minutes <= 0:
        return None
    top = (start_h - GRID_START_HOUR) * PIXELS_PER_HOUR + (start_m / 60) * PIXELS_PER_HOUR
    return GridPosition(top=top, height=(minutes / 60) * PIXELS_PER_HOUR)


def tag_color(item: Any, colors: Dict[str, str]) -> Optional[str]:
    tags = getattr(item, "tags", None) or []
    if not tags:
        return None
    return colors.get(tags[0])


@dataclass
class PlacedMeeting:
    meeting: Any
    position: GridPosition
    time_label: str
    color: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "meeting": self.meeting.model_dump(),
            "style": self.position.to_css(),
            "time": self.time_label,
            "color": self.color,
        }


@dataclass
class PlacedAction:
    action: Any
    placement: ActionPlacement
    time_label: str
    color: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.model_dump(),
            "style": self.placement.to_css(),
            "time": self.time_label,
            "color": self.color,
        }


@dataclass
class DayView:
    date: date
    meetings: List[PlacedMeeting] = field(default_factory=list)
    meetings_outside_grid: List[Any] = field(default_factory=list)
    actions: List[PlacedAction] = field(default_factory=list)
    actions_outside_grid: List[Any] = field(default_factory=list)
    work_entry: Optional[Any] = None
    work_band: Optional[GridPosition] = None
    vacation: List[Any] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "hours": list(range(GRID_START_HOUR, GRID_END_HOUR)),
            "meetings": [m.as_dict() for m in self.meetings],
            "meetings_outside_grid": [m.model_dump() for m in self.meetings_outside_grid],
            "actions": [a.as_dict() for a in self.actions],
            "actions_outside_grid": [a.model_dump() for a in self.actions_outside_grid],
            "work_entry": self.work_entry.model_dump() if self.work_entry is not None else None,
            "work_band": self.work_band.to_css() if self.work_band is not None else None,
            "vacation": [v.model_dump() for v in self.vacation],
        }


def build_day_view(
    day: date,
    meetings: Iterable[Any],
    actions: Iterable[Any],
    work_entries: Iterable[Any],
    vacation: Iterable[Any],
    tag_colors: Optional[Dict[str, str]] = None,
    tz: Optional[tzinfo] = None,
) -> DayView:
    colors = tag_colors or {}
    view = DayView(date=day)

    for m in meetings:
        if not is_same_day(m.date_time, day, tz):
            continue
        when = local_datetime(m.date_time, tz)
        position = get_grid_position(when, MEETING_DEFAULT_MINUTES)
        if position is None:
            view.meetings_outside_grid.append(m)
            continue
        view.meetings.append(
            PlacedMeeting(meeting=m, position=position, time_label=format_time(when), color=tag_color(m, colors))
        )

    for a in actions:
        if not is_action_on_day(a, day, tz):
            continue
        placement = place_action(a, day, tz)
        if placement is None:
            view.actions_outside_grid.append(a)
            continue
        start, _ = effective_interval(a, tz)
        view.actions.append(
            PlacedAction(action=a, placement=placement, time_label=format_time(start), color=tag_color(a, colors))
        )

    view.work_entry = next((w for w in work_entries if is_same_day(w.date, day)), None)
    view.work_band = work_overlay(view.work_entry)
    view.vacation = [v for v in vacation if is_same_day(v.date, day)]
    return view
