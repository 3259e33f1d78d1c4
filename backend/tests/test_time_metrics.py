"""Worked hours, overtime, vacation ledger and the weekly timesheet."""

from datetime import date

import pytest

from planner.models.time_tracking import VacationTransaction, WorkEntry
from planner.services.time_metrics import (
    build_timesheet,
    daily_overtime,
    normalize_vacation_hours,
    vacation_balance,
    worked_hours,
)


class TestWorkedHours:
    def test_break_is_deducted(self):
        assert worked_hours("08:00", "17:00", 30) == 8.5

    def test_missing_times_count_zero(self):
        assert worked_hours("08:00", None, 30) == 0
        assert worked_hours(None, "17:00") == 0

    def test_negative_spans_count_zero(self):
        assert worked_hours("17:00", "08:00") == 0
        assert worked_hours("08:00", "08:20", 30) == 0

    def test_overtime_against_eight_hour_day(self):
        assert daily_overtime(8.5) == 0.5
        assert daily_overtime(6) == -2


class TestVacation:
    def test_balance_from_ledger(self):
        ledger = [
            VacationTransaction(user_id="u", date=date(2024, 1, 1), type="Grant", hours=80),
            VacationTransaction(user_id="u", date=date(2024, 2, 1), type="Purchase", hours=8),
            VacationTransaction(user_id="u", date=date(2024, 3, 1), type="Usage", hours=-16),
            VacationTransaction(user_id="u", date=date(2024, 4, 1), type="Adjustment", hours=-2),
        ]
        balance = vacation_balance(ledger)
        assert balance.granted == 80
        assert balance.purchased == 8
        assert balance.used == 16
        assert balance.adjustments == -2
        assert balance.total == 70

    def test_empty_ledger(self):
        assert vacation_balance([]).total == 0

    @pytest.mark.parametrize(
        "kind,hours,expected",
        [("Usage", 8, -8), ("Usage", -8, -8), ("Grant", 8, 8), ("Adjustment", -4, -4)],
    )
    def test_usage_is_booked_negative(self, kind, hours, expected):
        assert normalize_vacation_hours(kind, hours) == expected


class TestTimesheet:
    def test_week_rows_and_totals(self):
        entries = [
            WorkEntry(user_id="u", date=date(2024, 5, 6), start_time="08:00", end_time="17:00", break_minutes=30),
            WorkEntry(user_id="u", date=date(2024, 5, 7), start_time="08:00"),
        ]
        sheet = build_timesheet(date(2024, 5, 8), entries)

        assert [row.date for row in sheet.days][0] == date(2024, 5, 6)
        assert len(sheet.days) == 7
        assert sheet.days[0].worked_hours == 8.5
        assert sheet.days[0].overtime == 0.5
        # incomplete entry: no hours and no negative overtime
        assert sheet.days[1].worked_hours == 0
        assert sheet.days[1].overtime == 0
        assert sheet.days[5].is_weekend and sheet.days[6].is_weekend
        assert sheet.total_hours == 8.5
        assert sheet.total_overtime == 0.5

    def test_as_dict(self):
        data = build_timesheet(date(2024, 5, 8), []).as_dict()
        assert data["days"][0]["date"] == "2024-05-06"
        assert data["days"][0]["entry"] is None
        assert data["total_hours"] == 0
