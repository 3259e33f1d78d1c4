"""Year-to-date report: credited versus expected hours and vacation planning.

Expected hours count Monday..Friday from January 1st through the calculation
end: December 31st for past years, today for the current year. Future years
expect nothing yet. Vacation usage before the calculation end is credited as
time worked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from planner.services.time_metrics import worked_hours


def business_days(start: date, end: date) -> int:
    """Weekdays in ``start..end`` inclusive; zero when the range is empty."""
    if end < start:
        return 0
    full_weeks, rest = divmod((end - start).days + 1, 7)
    count = full_weeks * 5
    for i in range(rest):
        if (start + timedelta(days=full_weeks * 7 + i)).weekday() < 5:
            count += 1
    return count


@dataclass
class YearlyReport:
    year: int
    calculated_through: Optional[date]
    business_days: int = 0
    expected_hours: float = 0.0
    worked_hours: float = 0.0
    vacation_hours: float = 0.0
    adjustment_hours: float = 0.0
    vacation_allowance_days: float = 0.0
    vacation_days_used: float = 0.0
    planned_vacation: List[Any] = field(default_factory=list)

    @property
    def credited_hours(self) -> float:
        return self.worked_hours + self.vacation_hours + self.adjustment_hours

    @property
    def overtime_balance(self) -> float:
        return self.credited_hours - self.expected_hours

    @property
    def vacation_days_remaining(self) -> float:
        return self.vacation_allowance_days - self.vacation_days_used

    def as_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "calculated_through": self.calculated_through.isoformat() if self.calculated_through else None,
            "business_days": self.business_days,
            "expected_hours": self.expected_hours,
            "worked_hours": self.worked_hours,
            "vacation_hours": self.vacation_hours,
            "adjustment_hours": self.adjustment_hours,
            "credited_hours": self.credited_hours,
            "overtime_balance": self.overtime_balance,
            "vacation_allowance_days": self.vacation_allowance_days,
            "vacation_days_used": self.vacation_days_used,
            "vacation_days_remaining": self.vacation_days_remaining,
            "planned_vacation": [v.model_dump() for v in self.planned_vacation],
        }


def build_yearly_report(
    year: int,
    work_entries: Iterable[Any],
    adjustments: Iterable[Any],
    vacation: Iterable[Any],
    contract_hours_per_week: float,
    vacation_days_per_year: float,
    today: date,
) -> YearlyReport:
    """Aggregate one calendar year's ledgers; inputs are expected to be that year's rows."""
    first = date(year, 1, 1)
    through = date(year, 12, 31) if year < today.year else today
    hours_per_day = contract_hours_per_week / 5

    report = YearlyReport(year=year, calculated_through=through if through >= first else None)
    report.business_days = business_days(first, through)
    report.expected_hours = report.business_days * hours_per_day
    report.worked_hours = sum(
        worked_hours(e.start_time, e.end_time, e.break_minutes) for e in work_entries if e.date <= today
    )
    report.adjustment_hours = sum(a.minutes for a in adjustments) / 60

    usage = sorted((v for v in vacation if v.type == "Usage"), key=lambda v: v.date)
    report.vacation_hours = sum(abs(v.hours) for v in usage if v.date <= through)
    report.vacation_allowance_days = vacation_days_per_year
    if hours_per_day > 0:
        report.vacation_days_used = sum(abs(v.hours) for v in usage) / hours_per_day
    report.planned_vacation = [v for v in usage if v.date > today]
    return report
