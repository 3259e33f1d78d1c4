from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from planner.services.dateutils import week_dates

STANDARD_WORKDAY_HOURS = 8
DEFAULT_BREAK_MINUTES = 30


def _minutes_of_day(hhmm: str) -> int:
    hours, minutes = (int(p) for p in hhmm.split(":")[:2])
    return hours * 60 + minutes


def worked_hours(start_time: Optional[str], end_time: Optional[str], break_minutes: int = 0) -> float:
    if not start_time or not end_time:
        return 0.0
    diff = _minutes_of_day(end_time) - _minutes_of_day(start_time) - (break_minutes or 0)
    return diff / 60 if diff > 0 else 0.0


def daily_overtime(hours: float) -> float:
    return hours - STANDARD_WORKDAY_HOURS


@dataclass
class VacationBalance:
    granted: float = 0.0
    purchased: float = 0.0
    used: float = 0.0
    adjustments: float = 0.0
    total: float = 0.0


def vacation_balance(transactions: Iterable[Any]) -> VacationBalance:
    """Derive the balance from the transaction ledger; it is never stored."""
    balance = VacationBalance()
    for t in transactions:
        hours = float(t.hours)
        if t.type == "Grant":
            balance.granted += hours
        elif t.type == "Purchase":
            balance.purchased += hours
        elif t.type == "Usage":
            balance.used += abs(hours)
        elif t.type == "Adjustment":
            balance.adjustments += hours
    balance.total = balance.granted + balance.purchased + balance.adjustments - balance.used
    return balance


def normalize_vacation_hours(kind: str, hours: float) -> float:
    # usage is entered as a positive number but booked negative
    if kind == "Usage" and hours > 0:
        return -hours
    return hours


@dataclass
class TimesheetRow:
    date: date
    entry: Optional[Any]
    worked_hours: float
    overtime: float
    is_weekend: bool

    def as_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "entry": self.entry.model_dump() if self.entry is not None else None,
            "worked_hours": self.worked_hours,
            "overtime": self.overtime,
            "is_weekend": self.is_weekend,
        }


@dataclass
class Timesheet:
    days: List[TimesheetRow] = field(default_factory=list)
    total_hours: float = 0.0
    total_overtime: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "days": [row.as_dict() for row in self.days],
            "total_hours": self.total_hours,
            "total_overtime": self.total_overtime,
        }


def build_timesheet(day: date, entries: Iterable[Any]) -> Timesheet:
    """Monday..Sunday rows for the week containing ``day``.

    Days without an entry, or whose entry lacks a start or end time, count
    zero hours and no overtime.
    """
    by_date = {e.date: e for e in entries}
    sheet = Timesheet()
    for d in week_dates(day):
        entry = by_date.get(d)
        hours = worked_hours(entry.start_time, entry.end_time, entry.break_minutes) if entry else 0.0
        complete = entry is not None and bool(entry.start_time and entry.end_time)
        overtime = daily_overtime(hours) if complete else 0.0
        sheet.days.append(
            TimesheetRow(date=d, entry=entry, worked_hours=hours, overtime=overtime, is_weekend=d.weekday() >= 5)
        )
        sheet.total_hours += hours
        sheet.total_overtime += overtime
    return sheet
