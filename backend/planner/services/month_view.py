"""Month view: a Monday-first grid of whole weeks with items bucketed by exact date.

Unlike the day view there is no spanning: an action shows up only on its due
date, meetings on their start date, work and vacation on their ledger date.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo
from typing import Any, Dict, Iterable, List, Optional

from planner.services.dateutils import is_same_day


def month_grid_dates(year: int, month: int) -> List[date]:
    """Monday on/before the 1st through Sunday on/after the last day, inclusive."""
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    start = first - timedelta(days=first.weekday())
    end = last + timedelta(days=6 - last.weekday())
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


@dataclass
class MonthCell:
    date: date
    in_month: bool
    is_today: bool
    meetings: List[Any] = field(default_factory=list)
    actions: List[Any] = field(default_factory=list)
    work_entry: Optional[Any] = None
    vacation: List[Any] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "in_month": self.in_month,
            "is_today": self.is_today,
            "meetings": [m.model_dump() for m in self.meetings],
            "actions": [a.model_dump() for a in self.actions],
            "work_entry": self.work_entry.model_dump() if self.work_entry is not None else None,
            "vacation": [v.model_dump() for v in self.vacation],
        }


@dataclass
class MonthView:
    year: int
    month: int
    cells: List[MonthCell] = field(default_factory=list)

    @property
    def weeks(self) -> List[List[MonthCell]]:
        return [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "weeks": [[cell.as_dict() for cell in week] for week in self.weeks],
        }


def build_month_view(
    year: int,
    month: int,
    meetings: Iterable[Any],
    actions: Iterable[Any],
    work_entries: Iterable[Any],
    vacation: Iterable[Any],
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> MonthView:
    meetings = list(meetings)
    actions = list(actions)
    work_entries = list(work_entries)
    vacation = list(vacation)
    today = today or date.today()

    view = MonthView(year=year, month=month)
    for d in month_grid_dates(year, month):
        view.cells.append(
            MonthCell(
                date=d,
                in_month=d.month == month,
                is_today=d == today,
                meetings=[m for m in meetings if is_same_day(m.date_time, d, tz)],
                actions=[a for a in actions if is_same_day(a.due_date, d, tz)],
                work_entry=next((w for w in work_entries if is_same_day(w.date, d)), None),
                vacation=[v for v in vacation if is_same_day(v.date, d)],
            )
        )
    return view
